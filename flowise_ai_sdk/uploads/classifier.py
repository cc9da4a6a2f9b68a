"""
Upload classification and encoding.

Walks the prompt's user turns, encodes every file part into a data URI
and decides how Flowise should receive it:

1. ``file:full`` when full-file upload is enabled (text is extracted later)
2. ``file:rag`` when retrieval-augmented upload is allowed
3. ``file`` for images when image upload is allowed
4. ``file`` otherwise

Size/type constraint violations are reported as warnings; the upload is
still sent.
"""

import uuid
from typing import List, Optional

from ..config.constants import DEFAULT_FILE_NAME, DEFAULT_MEDIA_TYPE
from ..models.conversation_types import FilePart, Prompt, TurnRole
from ..models.uploads import (
    ClassifiedUpload,
    UploadConfig,
    UploadMode,
    UploadTransformResult,
)
from ..observability.logging import Logger, get_logger
from .encoding import RemoteFetcher, data_url_media_type, encode_payload


def classify_upload(config: UploadConfig) -> UploadMode:
    """
    Pick the upload mode for one attachment. Always returns a mode.

    Allowed images and all other files both travel inline, so the media type
    does not affect the outcome.
    """
    if config.full_file_upload_enabled:
        return UploadMode.FULL
    if config.rag_upload_allowed:
        return UploadMode.RAG
    return UploadMode.INLINE


class UploadClassifier:
    """Turns the file parts of a prompt into ClassifiedUploads."""

    def __init__(self, fetch_remote: Optional[RemoteFetcher] = None, logger: Optional[Logger] = None):
        """
        Args:
            fetch_remote: Coroutine used to download RemoteUrlPayload attachments
            logger: Logger; defaults to the process-wide SDK logger
        """
        self.fetch_remote = fetch_remote
        self.logger = logger or get_logger()

    def file_parts(self, prompt: Prompt) -> List[FilePart]:
        """File parts of user turns, in prompt order."""
        parts: List[FilePart] = []
        for turn in prompt:
            if turn.role != TurnRole.USER:
                continue
            parts.extend(part for part in turn.parts() if isinstance(part, FilePart))
        return parts

    async def classify(
        self,
        prompt: Prompt,
        config: UploadConfig,
        chat_id: Optional[str] = None,
    ) -> UploadTransformResult:
        """
        Classify and encode every attachment of ``prompt``.

        Args:
            prompt: Conversation turns
            config: Resolved upload config
            chat_id: Caller-supplied session id, if any

        Returns:
            UploadTransformResult with uploads in attachment order, constraint
            warnings, and the session id (synthesized when a full upload needs one)

        Raises:
            AttachmentError: If an attachment cannot be normalized
        """
        self.logger.debug("Upload config", config=config.model_dump())
        uploads: List[ClassifiedUpload] = []
        warnings: List[str] = []

        for part in self.file_parts(prompt):
            name = part.filename or DEFAULT_FILE_NAME
            data_url = await encode_payload(part, self.fetch_remote)
            media_type = part.media_type or data_url_media_type(data_url) or DEFAULT_MEDIA_TYPE

            mode = classify_upload(config)
            self.logger.debug("Chosen upload type", file=name, upload_type=mode.value)

            size = len(data_url)
            if not config.allows(media_type, size):
                warnings.append(
                    f"File type or size not allowed by chatflow config: {media_type}, size: {size}"
                )

            uploads.append(ClassifiedUpload(type=mode, name=name, data=data_url, mime=media_type))

        if not chat_id and any(u.type == UploadMode.FULL for u in uploads):
            chat_id = str(uuid.uuid4())
            self.logger.debug("Generated chat id for full file uploads", chat_id=chat_id)

        return UploadTransformResult(uploads=uploads, warnings=warnings, chat_id=chat_id)
