"""Unit tests for attachment payload encoding."""

import pytest

from flowise_ai_sdk.converters.attachments import file_part, to_file_payload
from flowise_ai_sdk.models.conversation_types import (
    Base64Payload,
    BinaryPayload,
    DataUrlPayload,
    RemoteUrlPayload,
)
from flowise_ai_sdk.providers.base import AttachmentError
from flowise_ai_sdk.uploads.encoding import data_url_media_type, decode_data_url, encode_payload

pytestmark = pytest.mark.unit


class TestToFilePayload:

    def test_bytes(self):
        assert to_file_payload(b"abc") == BinaryPayload(data=b"abc")
        assert to_file_payload(bytearray(b"abc")) == BinaryPayload(data=b"abc")

    def test_data_url(self):
        assert isinstance(to_file_payload("data:text/plain;base64,YWJj"), DataUrlPayload)

    def test_remote_url(self):
        assert to_file_payload("https://example.com/a.pdf") == RemoteUrlPayload(url="https://example.com/a.pdf")

    def test_bare_base64(self):
        assert to_file_payload("YWJj") == Base64Payload(data="YWJj")

    def test_unrecognized_string(self):
        with pytest.raises(AttachmentError):
            to_file_payload("not base64 at all!")

    def test_unsupported_type(self):
        with pytest.raises(AttachmentError):
            to_file_payload(42)


class TestEncoding:

    @pytest.mark.asyncio
    async def test_encode_variants(self):
        assert await encode_payload(file_part(b"abc", media_type="text/plain")) == "data:text/plain;base64,YWJj"
        assert await encode_payload(file_part("YWJj", media_type="text/plain")) == "data:text/plain;base64,YWJj"
        assert await encode_payload(file_part("data:text/csv;base64,YWJj", media_type="text/plain")) == (
            "data:text/csv;base64,YWJj"
        )

    def test_decode_data_url(self):
        assert decode_data_url("data:text/plain;base64,YWJj") == b"abc"
        assert decode_data_url("YWJj") == b"abc"

    def test_decode_invalid(self):
        with pytest.raises(ValueError):
            decode_data_url("data:text/plain;base64,@@@")

    def test_data_url_media_type(self):
        assert data_url_media_type("data:image/png;base64,AAAA") == "image/png"
        assert data_url_media_type("data:;base64,AAAA") is None
        assert data_url_media_type("AAAA") is None
