"""
Full-file text extraction.

For ``file:full`` uploads Flowise expects the extracted text instead of
the raw bytes. The extractor posts the file to the attachments endpoint
of the session and returns the extracted content. Every failure results
in None so the caller can record a warning and keep going.
"""

from typing import Any, Optional

from ..config.constants import ATTACHMENTS_PATH
from ..models.uploads import ClassifiedUpload
from ..observability.logging import Logger, get_logger
from .config_resolver import FetchWithAuth
from .encoding import decode_data_url


class AttachmentExtractor:
    """Calls the Flowise attachment API for one upload at a time."""

    def __init__(self, fetch_with_auth: FetchWithAuth, logger: Optional[Logger] = None):
        self.fetch_with_auth = fetch_with_auth
        self.logger = logger or get_logger()

    async def extract(self, upload: ClassifiedUpload, chatflow_id: str, chat_id: str) -> Optional[str]:
        """
        Extract the text content of ``upload``.

        Args:
            upload: A ``file:full`` upload whose data is a data URI
            chatflow_id: Target chatflow
            chat_id: Session the attachment belongs to

        Returns:
            The extracted text, or None on any failure
        """
        try:
            content = decode_data_url(upload.data)
        except ValueError as e:
            self.logger.warn("Attachment payload is not valid base64", file=upload.name, error=str(e))
            return None

        self.logger.debug(
            "Sending file to attachment API",
            file=upload.name,
            mime=upload.mime,
            size=len(content),
        )
        path = ATTACHMENTS_PATH.format(chatflow_id=chatflow_id, chat_id=chat_id)
        try:
            response = await self.fetch_with_auth(
                path,
                method="POST",
                files={"files": (upload.name, content, upload.mime)},
            )
        except Exception as e:
            self.logger.warn("Attachment API error", file=upload.name, error=str(e))
            return None

        self.logger.debug("Attachment API response", file=upload.name, status=response.status_code)
        if not response.is_success:
            self.logger.warn(
                "Attachment API failed",
                file=upload.name,
                status=response.status_code,
                reason=response.reason_phrase,
            )
            return None

        try:
            body = response.json()
        except ValueError as e:
            self.logger.warn("Attachment API returned invalid JSON", file=upload.name, error=str(e))
            return None

        extracted = self._find_content(body, upload)
        if extracted:
            return extracted

        self.logger.warn("Attachment API response missing 'content'", file=upload.name)
        return None

    @staticmethod
    def _find_content(body: Any, upload: ClassifiedUpload) -> Optional[str]:
        if isinstance(body, list):
            for entry in body:
                if (
                    isinstance(entry, dict)
                    and entry.get("name") == upload.name
                    and entry.get("mimeType") == upload.mime
                ):
                    content = entry.get("content")
                    return content if isinstance(content, str) else None
            return None
        if isinstance(body, dict):
            content = body.get("content")
            return content if isinstance(content, str) else None
        return None
