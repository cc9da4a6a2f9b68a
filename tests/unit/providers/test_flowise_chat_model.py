"""Unit tests for the Flowise chat model."""

import json

import httpx
import pytest

from flowise_ai_sdk.converters.attachments import file_part
from flowise_ai_sdk.models.conversation_types import ConversationTurn, TextPart
from flowise_ai_sdk.models.uploads import UploadMode
from flowise_ai_sdk.providers.base import AttachmentError, ProviderError
from flowise_ai_sdk.providers.flowise import FlowiseChatModel
from flowise_ai_sdk.uploads.encoding import to_data_url
from tests.conftest import PDF_BYTES, PNG_BYTES
from tests.helpers.flowise_mocks import json_body
from tests.helpers.streaming_mocks import RecordingByteStream, sse_body, token_events

pytestmark = pytest.mark.unit

CHATFLOW = "/api/v1/chatflows/flow-1"
PREDICTION = "/api/v1/prediction/flow-1"


def full_upload_chatflow(request):
    return httpx.Response(200, json={
        "id": "flow-1",
        "chatbotConfig": json.dumps({"fullFileUpload": {"status": True}}),
    })


@pytest.fixture
def model(client, logger):
    return FlowiseChatModel("flow-1", client, logger=logger)


def attachments_path(chat_id):
    return f"/api/v1/attachments/flow-1/{chat_id}"


class TestPrepareRequest:

    @pytest.mark.asyncio
    async def test_full_upload_partial_extraction(self, server, model):
        """Two full uploads: the first is extracted, the second keeps its payload with one warning."""
        server.add("GET", CHATFLOW, full_upload_chatflow)
        calls = []

        def extract(request):
            calls.append(request)
            if len(calls) == 1:
                return httpx.Response(200, json={"content": "text of first"})
            return httpx.Response(500, text="extraction failed")

        server.fallback = extract
        prompt = [ConversationTurn.user(
            "Summarize",
            file_part(PDF_BYTES, "application/pdf", "first.pdf"),
            file_part(b"second file", "text/plain", "second.txt"),
        )]

        prepared = await model.prepare_request(prompt)

        uploads = prepared.request.uploads
        chat_id = prepared.request.chat_id
        assert chat_id
        assert [u.type for u in uploads] == [UploadMode.FULL, UploadMode.FULL]
        assert uploads[0].data == "text of first"
        assert uploads[1].data == to_data_url(b"second file", "text/plain")
        assert [w.message for w in prepared.warnings] == ["Failed to extract content for file: second.txt"]
        assert [r.url.path for r in calls] == [attachments_path(chat_id)] * 2

    @pytest.mark.asyncio
    async def test_empty_config_image_upload(self, server, model, png_part):
        """All config sources unreachable: the image goes inline with no warnings."""
        server.add("GET", CHATFLOW, httpx.ConnectError("refused"))

        prepared = await model.prepare_request([ConversationTurn.user("What is this?", png_part)])

        request = prepared.request
        assert [u.type for u in request.uploads] == [UploadMode.INLINE]
        assert request.uploads[0].data == to_data_url(PNG_BYTES, "image/png")
        assert request.chat_id is None
        assert prepared.warnings == []
        assert server.paths() == [
            CHATFLOW,
            "/api/v1/public-chatbotConfig/flow-1",
            "/api/v1/chatflows-uploads/flow-1",
        ]

    @pytest.mark.asyncio
    async def test_extraction_warnings_precede_constraint_warnings(self, server, model):
        server.add("GET", CHATFLOW, httpx.Response(200, json={"chatbotConfig": json.dumps({
            "fullFileUpload": {"status": True},
            "fileUploadSizeAndTypes": [{"fileTypes": ["application/pdf"], "maxUploadSize": 10 ** 6}],
        })}))

        prepared = await model.prepare_request(
            [ConversationTurn.user("x", file_part(b"notes", "text/plain", "notes.txt"))],
            chat_id="session-1",
        )

        messages = [w.message for w in prepared.warnings]
        assert messages[0] == "Failed to extract content for file: notes.txt"
        assert messages[1].startswith("File type or size not allowed by chatflow config: text/plain")
        assert prepared.request.chat_id == "session-1"

    @pytest.mark.asyncio
    async def test_no_uploads_field_without_files(self, model, text_prompt):
        prepared = await model.prepare_request(text_prompt, override_config={"temperature": 0})

        payload = prepared.request.to_payload()
        assert "uploads" not in payload
        assert payload["overrideConfig"] == {"temperature": 0}

    @pytest.mark.asyncio
    async def test_unfetchable_remote_file_aborts(self, server, model):
        server.add("GET", "/remote/a.pdf", httpx.Response(404))

        with pytest.raises(AttachmentError):
            await model.prepare_request([ConversationTurn.user(
                "x", file_part("http://flowise.test/remote/a.pdf", "application/pdf", "a.pdf")
            )])


class TestGenerate:

    @pytest.mark.asyncio
    async def test_generate(self, server, model):
        server.add("POST", PREDICTION, httpx.Response(200, json={"text": "Hello there friend", "chatId": "c9"}))

        result = await model.generate([ConversationTurn.user("Say hello")])

        assert result.text == "Hello there friend"
        assert result.finish_reason == "stop"
        assert result.chat_id == "c9"
        assert result.usage.input_tokens == 3
        assert result.usage.output_tokens == 4
        assert result.usage.total_tokens == 7
        assert result.warnings == []
        assert json_body(server.requests_to(PREDICTION)[0])["question"] == "Say hello"

    @pytest.mark.asyncio
    async def test_empty_response_warns(self, server, model):
        server.add("POST", PREDICTION, httpx.Response(200, json={}))

        result = await model.generate([ConversationTurn.user("Say hello")])

        assert result.text == ""
        assert [w.message for w in result.warnings] == ["No response from Flowise"]

    @pytest.mark.asyncio
    async def test_transport_error_prefix(self, server, model):
        server.add("POST", PREDICTION, httpx.Response(500, json={"message": "boom"}))

        with pytest.raises(ProviderError, match="^Flowise API error: boom$"):
            await model.generate([ConversationTurn.user("x")])


class TestStream:

    @pytest.mark.asyncio
    async def test_stream(self, server, model):
        server.add("POST", PREDICTION, httpx.Response(200, content=sse_body(token_events(["Hi", " there"]))))

        result = await model.stream([ConversationTurn.user(TextPart(text="Greet me"))], chat_id="c1")
        parts = [part async for part in result]

        assert [p.type for p in parts] == [
            "stream-start", "text-start", "text-delta", "text-delta", "text-end", "finish"
        ]
        assert parts[-1].usage.input_tokens == 3
        assert parts[-1].usage.output_tokens == 4
        assert result.chat_id == "c1"
        body = json_body(server.requests_to(PREDICTION)[0])
        assert body["streaming"] is True
        assert body["chatId"] == "c1"

    @pytest.mark.asyncio
    async def test_stream_without_end_event(self, server, model):
        server.add("POST", PREDICTION, httpx.Response(200, content=sse_body(token_events(["a"], end=False))))

        result = await model.stream([ConversationTurn.user("x")])
        parts = [part async for part in result]

        assert [p.type for p in parts] == ["stream-start", "text-start", "text-delta", "text-end"]

    @pytest.mark.asyncio
    async def test_stream_error_prefix(self, server, model):
        server.add("POST", PREDICTION, httpx.Response(404, json={"message": "Chatflow not found"}))

        with pytest.raises(ProviderError, match="^Flowise streaming error: Chatflow not found$"):
            await model.stream([ConversationTurn.user("x")])

    @pytest.mark.asyncio
    async def test_stream_close_early(self, server, model):
        server.add("POST", PREDICTION, httpx.Response(200, content=sse_body(token_events(["a", "b"]))))

        result = await model.stream([ConversationTurn.user("x")])
        stream = result.__aiter__()
        assert (await stream.__anext__()).type == "stream-start"

        await result.aclose()

        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()

    @pytest.mark.asyncio
    async def test_close_before_first_part_releases_response(self, server, model):
        body = RecordingByteStream(sse_body(token_events(["a"])))
        server.add("POST", PREDICTION, lambda request: httpx.Response(200, stream=body))

        result = await model.stream([ConversationTurn.user("x")])
        assert body.closed is False

        await result.aclose()

        assert body.closed is True

    @pytest.mark.asyncio
    async def test_consumed_stream_releases_response(self, server, model):
        body = RecordingByteStream(sse_body(token_events(["a"])))
        server.add("POST", PREDICTION, lambda request: httpx.Response(200, stream=body))

        result = await model.stream([ConversationTurn.user("x")])
        parts = [part async for part in result]

        assert parts[-1].type == "finish"
        assert body.closed is True


class TestChatModel:

    def test_identity(self, model):
        assert model.provider == "flowise"
        assert model.model_id == "flowise-chatflow"

    def test_supports_url(self, model):
        assert model.supports_url("https://example.com/a.pdf") is True
        assert model.supports_url("ftp://example.com/a.pdf") is False
