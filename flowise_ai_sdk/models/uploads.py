"""
Upload negotiation models.

UploadConfig is the normalized view of the upload settings a chatflow
exposes. Flowise spreads these settings over several payload shapes
(the chatbot config, the ``uploads`` section, the dedicated uploads
endpoint), so ``from_payload`` merges whatever shape it is given.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class UploadMode(str, Enum):
    """How an attachment is transmitted, using Flowise's wire values."""
    INLINE = "file"
    RAG = "file:rag"
    FULL = "file:full"


class FileUploadConstraint(BaseModel):
    """One permitted size/type combination.

    ``None`` means unrestricted; an empty type list matches no media type.
    """
    allowed_media_types: Optional[List[str]] = None
    max_size_bytes: Optional[int] = None

    def allows(self, media_type: str, size: int) -> bool:
        if self.allowed_media_types is not None and media_type not in self.allowed_media_types:
            return False
        if self.max_size_bytes and size > self.max_size_bytes:
            return False
        return True

    @classmethod
    def from_payload(cls, entry: Dict[str, Any]) -> "FileUploadConstraint":
        types = entry.get("types", entry.get("fileTypes"))
        if isinstance(types, str):
            types = [t.strip() for t in types.split(",") if t.strip()] if types.strip() else None
        max_size = entry.get("maxSize", entry.get("maxUploadSize"))
        return cls(
            allowed_media_types=list(types) if types is not None else None,
            max_size_bytes=int(max_size) if max_size else None,
        )


class UploadConfig(BaseModel):
    """Merged upload configuration. The empty config denies every non-default mode."""
    full_file_upload_enabled: bool = False
    rag_upload_allowed: bool = False
    image_upload_allowed: bool = False
    size_and_type_constraints: List[FileUploadConstraint] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "UploadConfig":
        """
        Merge a raw Flowise config payload into an UploadConfig.

        Args:
            payload: Decoded JSON from any of the upload config endpoints.
                May carry nested ``uploads`` and ``chatbotConfig`` sections;
                ``chatbotConfig`` may itself be a JSON string.

        Returns:
            UploadConfig where a flag is set if any section enables it
        """
        if not isinstance(payload, dict):
            return cls()

        sections = []
        uploads = payload.get("uploads")
        if isinstance(uploads, dict):
            sections.append(uploads)
        chatbot_config = payload.get("chatbotConfig")
        if isinstance(chatbot_config, str):
            try:
                chatbot_config = json.loads(chatbot_config)
            except ValueError:
                chatbot_config = None
        if isinstance(chatbot_config, dict):
            sections.append(chatbot_config)
        sections.append(payload)

        def enabled(key: str) -> bool:
            return any(bool(section.get(key)) for section in sections)

        def full_upload_status(section: Dict[str, Any]) -> bool:
            full = section.get("fullFileUpload")
            return isinstance(full, dict) and bool(full.get("status"))

        constraints: List[FileUploadConstraint] = []
        for section in sections:
            entries = section.get("fileUploadSizeAndTypes")
            if isinstance(entries, list) and entries:
                constraints = [
                    FileUploadConstraint.from_payload(entry)
                    for entry in entries
                    if isinstance(entry, dict)
                ]
                break

        return cls(
            full_file_upload_enabled=any(full_upload_status(s) for s in sections),
            rag_upload_allowed=enabled("isRAGFileUploadAllowed"),
            image_upload_allowed=enabled("isImageUploadAllowed"),
            size_and_type_constraints=constraints,
        )

    def allows(self, media_type: str, size: int) -> bool:
        """True if no constraints are configured or any constraint entry matches."""
        if not self.size_and_type_constraints:
            return True
        return any(c.allows(media_type, size) for c in self.size_and_type_constraints)


class ClassifiedUpload(BaseModel):
    """An attachment ready to be sent in a prediction request."""
    type: UploadMode
    name: str
    data: str
    mime: str

    def summary(self) -> Dict[str, Any]:
        """Loggable description without the payload itself."""
        return {"name": self.name, "type": self.type.value, "mime": self.mime, "dataLength": len(self.data)}


class UploadTransformResult(BaseModel):
    """Output of the upload classifier."""
    uploads: List[ClassifiedUpload] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    chat_id: Optional[str] = None
