"""
Caller-facing attachment adapter.

Callers often hold attachment data as "whatever they have": bytes, a data
URI, a bare base64 string or a URL. This module decides which one it is
and builds the explicit payload variant, so the upload classifier never
has to inspect raw values.
"""

import re
from typing import Optional, Union

from ..models.conversation_types import (
    Base64Payload,
    BinaryPayload,
    DataUrlPayload,
    FilePart,
    RemoteUrlPayload,
)
from ..providers.base import AttachmentError

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/=]+$")

RawFileData = Union[str, bytes, bytearray, memoryview]
FilePayloadVariant = Union[DataUrlPayload, Base64Payload, RemoteUrlPayload, BinaryPayload]


def to_file_payload(data: RawFileData) -> FilePayloadVariant:
    """
    Wrap raw attachment data in its payload variant.

    Raises:
        AttachmentError: If a string is neither a data URI, a URL nor base64
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return BinaryPayload(data=bytes(data))
    if isinstance(data, str):
        if data.startswith("data:"):
            return DataUrlPayload(url=data)
        if data.startswith("http://") or data.startswith("https://"):
            return RemoteUrlPayload(url=data)
        if _BASE64_RE.match(data):
            return Base64Payload(data=data)
    raise AttachmentError(f"Unsupported attachment data: {type(data).__name__}")


def file_part(
    data: RawFileData,
    media_type: Optional[str] = None,
    filename: Optional[str] = None,
) -> FilePart:
    """Build a FilePart from raw attachment data."""
    return FilePart(filename=filename, media_type=media_type, data=to_file_payload(data))
