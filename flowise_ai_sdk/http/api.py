"""FastAPI HTTP endpoints for Flowise AI SDK.

Exposes a chatflow as a server-sent-events stream of protocol parts,
one JSON object per ``data:`` line, terminated by ``data: [DONE]``.
"""

import json
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from ..config.constants import SSE_DONE_SENTINEL
from ..models.conversation_types import ConversationTurn
from ..observability.logging import StructuredLogger
from ..providers.base import ProviderError
from ..providers.errors import ErrorMapper
from ..providers.flowise import FlowiseProvider, create_flowise_provider


# Create router instance
router = APIRouter()

logger = StructuredLogger("http")

_provider: Optional[FlowiseProvider] = None


def get_provider() -> FlowiseProvider:
    """Shared provider, configured from the environment on first use."""
    global _provider
    if _provider is None:
        _provider = create_flowise_provider()
    return _provider


def _classify(error: ProviderError) -> Dict[str, Any]:
    details = ErrorMapper.get_error_classification(error)
    details.pop("provider", None)
    return details


class ChatRequest(BaseModel):
    messages: List[ConversationTurn] = Field(..., min_length=1)
    chat_id: Optional[str] = None
    override_config: Optional[Dict[str, Any]] = None


@router.post("/chat/{chatflow_id}")
async def chat_stream(
    chatflow_id: str,
    body: ChatRequest,
):
    """Stream a chatflow response as server-sent events."""
    try:
        result = await get_provider().chat(chatflow_id).stream(
            body.messages,
            chat_id=body.chat_id,
            override_config=body.override_config,
        )
    except ProviderError as e:
        logger.warn("Chat request failed", chatflow_id=chatflow_id, **_classify(e))
        raise HTTPException(status_code=e.status_code or 500, detail=str(e))

    async def generate_stream():
        try:
            async for part in result:
                yield f"data: {json.dumps(part.to_dict())}\n\n"
        except ProviderError as e:
            logger.error("Stream aborted", error=e, chatflow_id=chatflow_id, **_classify(e))
            yield f"data: {json.dumps({'type': 'error', 'error': str(e)})}\n\n"
        finally:
            await result.aclose()
        yield f"data: {SSE_DONE_SENTINEL}\n\n"

    headers = {"Cache-Control": "no-cache"}
    if result.chat_id:
        headers["X-Flowise-Chat-Id"] = result.chat_id
    if result.warnings:
        headers["X-Flowise-Warnings"] = json.dumps([w.message for w in result.warnings])

    return StreamingResponse(
        generate_stream(),
        media_type="text/event-stream",
        headers=headers,
    )
