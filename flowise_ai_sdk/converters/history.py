"""
Conversion between Flowise stored chat messages and client chat messages.

Flowise persists messages with roles ``userMessage`` / ``apiMessage`` and
keeps reasoning and tool usage as JSON strings. These helpers turn them
into ChatMessage objects with typed parts.
"""

import json
from datetime import datetime
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.generation import PredictionResponse


class FlowiseChatMessage(BaseModel):
    """A chat message as stored by Flowise."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    role: Literal["userMessage", "apiMessage"]
    content: str = ""
    chat_id: Optional[str] = None
    chatflowid: Optional[str] = None
    created_date: Optional[datetime] = None
    source_documents: Optional[str] = None
    used_tools: Optional[str] = None
    file_annotations: Optional[str] = None
    agent_reasoning: Optional[str] = None
    artifacts: Optional[str] = None
    action: Optional[str] = None
    follow_up_prompts: Optional[str] = None


class ToolInvocation(BaseModel):
    state: str = "call"
    tool_call_id: str
    tool_name: str
    args: Dict[str, Any] = Field(default_factory=dict)


class MessageTextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class MessageToolInvocationPart(BaseModel):
    type: Literal["tool-invocation"] = "tool-invocation"
    tool_invocation: ToolInvocation


class ChatMessage(BaseModel):
    """Client-side chat message."""
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    role: Literal["user", "assistant", "system"]
    content: str
    parts: Optional[List[Union[MessageTextPart, MessageToolInvocationPart]]] = None
    created_at: Optional[datetime] = None


def _reasoning_parts(raw: str) -> List[MessageTextPart]:
    try:
        reasoning = json.loads(raw)
    except ValueError:
        return [MessageTextPart(text=f"[Reasoning: {raw}]")]
    parts = []
    if isinstance(reasoning, list):
        for reason in reasoning:
            if isinstance(reason, dict) and reason.get("type") == "text" and reason.get("text"):
                parts.append(MessageTextPart(text=f"[Reasoning: {reason['text']}]"))
    return parts


def _tool_parts(raw: str) -> List[MessageToolInvocationPart]:
    try:
        tools = json.loads(raw)
    except ValueError:
        return []
    parts = []
    if isinstance(tools, list):
        for tool in tools:
            if isinstance(tool, dict) and tool.get("toolCallId") and tool.get("toolName"):
                parts.append(MessageToolInvocationPart(tool_invocation=ToolInvocation(
                    tool_call_id=tool["toolCallId"],
                    tool_name=tool["toolName"],
                    args=tool.get("args") or {},
                )))
    return parts


def convert_history_to_messages(
    messages: Iterable[Union[FlowiseChatMessage, Dict[str, Any]]],
    allow_message_types: Iterable[str] = ("userMessage", "apiMessage"),
) -> List[ChatMessage]:
    """
    Convert stored Flowise messages to ChatMessages, oldest first.

    Args:
        messages: Stored messages (models or raw dicts)
        allow_message_types: Flowise roles to keep

    Returns:
        Messages with text, reasoning and tool-invocation parts
    """
    allowed = set(allow_message_types)
    converted = []
    for message in messages:
        if not isinstance(message, FlowiseChatMessage):
            message = FlowiseChatMessage.model_validate(message)
        if message.role not in allowed:
            continue

        parts: List[Union[MessageTextPart, MessageToolInvocationPart]] = []
        if message.content:
            parts.append(MessageTextPart(text=message.content))
        if message.agent_reasoning:
            parts.extend(_reasoning_parts(message.agent_reasoning))
        if message.used_tools:
            parts.extend(_tool_parts(message.used_tools))

        converted.append(ChatMessage(
            id=message.id,
            role="user" if message.role == "userMessage" else "assistant",
            content=message.content,
            parts=parts or None,
            created_at=message.created_date,
        ))

    # Only sort when every message is dated
    dated = [m for m in converted if m.created_at is not None]
    if len(dated) == len(converted):
        converted.sort(key=lambda m: m.created_at)
    return converted


def convert_response_to_message(response: PredictionResponse) -> ChatMessage:
    """Turn a prediction response into an assistant message, keeping Flowise metadata."""
    extras = {
        key: value
        for key, value in response.model_dump(by_alias=True, exclude_none=True).items()
        if key not in ("text", "question", "chatId", "chatMessageId")
    }
    return ChatMessage(
        id=response.chat_message_id,
        role="assistant",
        content=response.text or "",
        **extras,
    )


def convert_from_message(message: ChatMessage) -> Dict[str, str]:
    """Map a ChatMessage to Flowise history format; anything not from the user is ``apiMessage``."""
    role = "userMessage" if message.role == "user" else "apiMessage"
    return {"role": role, "content": message.content}
