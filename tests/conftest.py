"""Shared pytest fixtures for Flowise AI SDK tests."""

import base64

import httpx
import pytest

from flowise_ai_sdk.client.flowise_client import FlowiseClient
from flowise_ai_sdk.config.settings import FlowiseClientOptions
from flowise_ai_sdk.converters.attachments import file_part
from flowise_ai_sdk.models.conversation_types import ConversationTurn
from flowise_ai_sdk.models.uploads import FileUploadConstraint, UploadConfig
from tests.helpers.flowise_mocks import MockFlowiseServer, RecordingLogger

BASE_URL = "http://flowise.test"
CHATFLOW_ID = "flow-1"

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PDF_BYTES = b"%PDF-1.4 minimal test document"


@pytest.fixture(autouse=True)
def clear_flowise_env(monkeypatch):
    """Keep a developer's .env from leaking into tests."""
    for key in ("FLOWISE_BASE_URL", "FLOWISE_API_KEY", "FLOWISE_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def logger():
    """Logger that records every call."""
    return RecordingLogger()


@pytest.fixture
def server():
    """Mock Flowise server with no routes."""
    return MockFlowiseServer()


@pytest.fixture
def make_client(server, logger):
    """Factory for FlowiseClients talking to the mock server."""
    def _make(api_key=None):
        options = FlowiseClientOptions(base_url=BASE_URL, api_key=api_key)
        http_client = httpx.AsyncClient(transport=server.transport)
        return FlowiseClient(options, http_client=http_client, logger=logger)
    return _make


@pytest.fixture
def client(make_client):
    """FlowiseClient without an API key."""
    return make_client()


@pytest.fixture
def text_prompt():
    """Single user turn with plain text."""
    return [ConversationTurn.user("What is in the document?")]


@pytest.fixture
def png_part():
    """An image attachment given as raw bytes."""
    return file_part(PNG_BYTES, media_type="image/png", filename="pixel.png")


@pytest.fixture
def pdf_part():
    """A PDF attachment given as raw bytes."""
    return file_part(PDF_BYTES, media_type="application/pdf", filename="report.pdf")


@pytest.fixture
def empty_config():
    return UploadConfig()


@pytest.fixture
def full_upload_config():
    return UploadConfig(full_file_upload_enabled=True)


@pytest.fixture
def rag_config():
    return UploadConfig(rag_upload_allowed=True)


@pytest.fixture
def pdf_only_config():
    """Only PDFs up to 1 MB are allowed."""
    return UploadConfig(size_and_type_constraints=[
        FileUploadConstraint(allowed_media_types=["application/pdf"], max_size_bytes=1024 * 1024)
    ])
