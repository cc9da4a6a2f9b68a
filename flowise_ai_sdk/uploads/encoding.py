"""Encoding helpers that turn attachment payloads into base64 data URIs."""

import base64
import binascii
from typing import Awaitable, Callable, Optional

import httpx

from ..config.constants import DEFAULT_MEDIA_TYPE
from ..models.conversation_types import (
    Base64Payload,
    BinaryPayload,
    DataUrlPayload,
    FilePart,
    RemoteUrlPayload,
)
from ..providers.base import AttachmentError

RemoteFetcher = Callable[[str], Awaitable[httpx.Response]]


def to_data_url(data: bytes, media_type: Optional[str]) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type or DEFAULT_MEDIA_TYPE};base64,{encoded}"


def wrap_base64(data: str, media_type: Optional[str]) -> str:
    return f"data:{media_type or DEFAULT_MEDIA_TYPE};base64,{data}"


def data_url_media_type(data_url: str) -> Optional[str]:
    """Media type declared in a ``data:`` URI header, if any."""
    if not data_url.startswith("data:") or "," not in data_url:
        return None
    header = data_url[len("data:"):data_url.index(",")]
    media_type = header.split(";")[0].strip()
    return media_type or None


def decode_data_url(data: str) -> bytes:
    """
    Decode a data URI (or bare base64 string) back into bytes.

    Raises:
        ValueError: If the payload is not valid base64
    """
    if data.startswith("data:"):
        data = data[data.index(",") + 1:]
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


async def fetch_as_data_url(fetch: RemoteFetcher, url: str, media_type: Optional[str]) -> str:
    """
    Download ``url`` and re-encode it as a data URI.

    The declared media type wins over the response content-type.

    Raises:
        AttachmentError: On transport failure or a non-2xx response
    """
    try:
        response = await fetch(url)
    except httpx.HTTPError as e:
        raise AttachmentError(f"Failed to fetch file: {url} ({e})") from e
    if not response.is_success:
        raise AttachmentError(f"Failed to fetch file: {url}", status_code=response.status_code)
    content_type = response.headers.get("content-type")
    if content_type:
        content_type = content_type.split(";")[0].strip()
    return to_data_url(response.content, media_type or content_type)


async def encode_payload(part: FilePart, fetch: Optional[RemoteFetcher] = None) -> str:
    """Normalize a file part's payload into a base64 data URI."""
    payload = part.data
    if isinstance(payload, DataUrlPayload):
        return payload.url
    if isinstance(payload, Base64Payload):
        return wrap_base64(payload.data, part.media_type)
    if isinstance(payload, BinaryPayload):
        return to_data_url(payload.data, part.media_type)
    if isinstance(payload, RemoteUrlPayload):
        if fetch is None:
            raise AttachmentError(f"No fetcher available for remote file: {payload.url}")
        return await fetch_as_data_url(fetch, payload.url, part.media_type)
    raise AttachmentError(f"Unsupported attachment payload: {type(payload).__name__}")
