"""Unit tests for upload config resolution and parsing."""

import json

import httpx
import pytest

from flowise_ai_sdk.models.uploads import FileUploadConstraint, UploadConfig
from flowise_ai_sdk.uploads.config_resolver import UploadConfigResolver

pytestmark = pytest.mark.unit

CHATFLOW = "/api/v1/chatflows/flow-1"
PUBLIC = "/api/v1/public-chatbotConfig/flow-1"
UPLOADS = "/api/v1/chatflows-uploads/flow-1"


class TestUploadConfigFromPayload:

    def test_empty_payload(self):
        assert UploadConfig.from_payload({}) == UploadConfig()
        assert UploadConfig.from_payload(None) == UploadConfig()

    def test_flags_from_uploads_section(self):
        config = UploadConfig.from_payload({
            "uploads": {
                "isRAGFileUploadAllowed": True,
                "isImageUploadAllowed": True,
                "fileUploadSizeAndTypes": [{"fileTypes": ["application/pdf"], "maxUploadSize": 500}],
            }
        })

        assert config.rag_upload_allowed is True
        assert config.image_upload_allowed is True
        assert config.full_file_upload_enabled is False
        assert config.size_and_type_constraints == [
            FileUploadConstraint(allowed_media_types=["application/pdf"], max_size_bytes=500)
        ]

    def test_full_file_upload_from_string_chatbot_config(self):
        config = UploadConfig.from_payload({"chatbotConfig": json.dumps({"fullFileUpload": {"status": True}})})

        assert config.full_file_upload_enabled is True

    def test_disabled_full_file_upload(self):
        config = UploadConfig.from_payload({"fullFileUpload": {"status": False}})

        assert config.full_file_upload_enabled is False

    def test_comma_separated_types(self):
        constraint = FileUploadConstraint.from_payload({"types": "image/png, image/jpeg", "maxSize": 10})

        assert constraint.allowed_media_types == ["image/png", "image/jpeg"]
        assert constraint.allows("image/png", 10) is True
        assert constraint.allows("image/png", 11) is False
        assert constraint.allows("text/plain", 1) is False

    def test_allows_without_constraints(self):
        assert UploadConfig().allows("anything/at-all", 10 ** 9) is True

    def test_empty_type_list_allows_nothing(self):
        constraint = FileUploadConstraint.from_payload({"types": [], "maxSize": 10_000_000})

        assert constraint.allowed_media_types == []
        assert constraint.allows("application/pdf", 1) is False

    def test_missing_types_allows_any_media_type(self):
        constraint = FileUploadConstraint.from_payload({"maxSize": 10_000_000})

        assert constraint.allowed_media_types is None
        assert constraint.allows("application/pdf", 1) is True
        assert constraint.allows("application/pdf", 10_000_001) is False


class TestUploadConfigResolver:

    @pytest.mark.asyncio
    async def test_authenticated_config_wins(self, server, client, logger):
        server.add("GET", CHATFLOW, httpx.Response(200, json={
            "id": "flow-1",
            "chatbotConfig": json.dumps({"fullFileUpload": {"status": True}}),
        }))
        server.add("GET", PUBLIC, httpx.Response(200, json={"isRAGFileUploadAllowed": True}))

        config = await UploadConfigResolver(client.fetch_with_auth, logger).resolve("flow-1")

        assert config.full_file_upload_enabled is True
        assert config.rag_upload_allowed is False
        assert server.paths() == [CHATFLOW]

    @pytest.mark.asyncio
    async def test_falls_back_to_public_config(self, server, client, logger):
        server.add("GET", CHATFLOW, httpx.Response(401, json={"message": "Unauthorized"}))
        server.add("GET", PUBLIC, httpx.Response(200, json={"uploads": {"isRAGFileUploadAllowed": True}}))

        config = await UploadConfigResolver(client.fetch_with_auth, logger).resolve("flow-1")

        assert config.rag_upload_allowed is True
        assert server.paths() == [CHATFLOW, PUBLIC]
        assert "Failed to fetch authenticated chatflow config" in logger.messages("warn")

    @pytest.mark.asyncio
    async def test_chatflow_without_chatbot_config_falls_through(self, server, client, logger):
        server.add("GET", CHATFLOW, httpx.Response(200, json={"id": "flow-1"}))
        server.add("GET", PUBLIC, httpx.Response(200, json={"isImageUploadAllowed": True}))

        config = await UploadConfigResolver(client.fetch_with_auth, logger).resolve("flow-1")

        assert config.image_upload_allowed is True
        assert server.paths() == [CHATFLOW, PUBLIC]

    @pytest.mark.asyncio
    async def test_falls_back_to_uploads_endpoint(self, server, client, logger):
        server.add("GET", CHATFLOW, httpx.ConnectError("refused"))
        server.add("GET", PUBLIC, httpx.Response(500, text="oops"))
        server.add("GET", UPLOADS, httpx.Response(200, json={"isRAGFileUploadAllowed": True}))

        config = await UploadConfigResolver(client.fetch_with_auth, logger).resolve("flow-1")

        assert config.rag_upload_allowed is True
        assert server.paths() == [CHATFLOW, PUBLIC, UPLOADS]

    @pytest.mark.asyncio
    async def test_all_sources_fail(self, server, client, logger):
        server.add("GET", CHATFLOW, httpx.Response(200, json={"chatbotConfig": "{not json"}))
        server.add("GET", UPLOADS, httpx.Response(200, text="<html>"))

        config = await UploadConfigResolver(client.fetch_with_auth, logger).resolve("flow-1")

        assert config == UploadConfig()
        assert "No upload config source answered, using empty config" in logger.messages("warn")

    @pytest.mark.asyncio
    async def test_sends_authorization_header(self, server, make_client, logger):
        client = make_client(api_key="secret")
        server.add("GET", CHATFLOW, httpx.Response(200, json={"chatbotConfig": "{}"}))

        await UploadConfigResolver(client.fetch_with_auth, logger).resolve("flow-1")

        assert server.requests[0].headers["Authorization"] == "Bearer secret"
