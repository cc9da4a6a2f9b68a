"""Converters between client-facing shapes and Flowise shapes."""

from .attachments import file_part, to_file_payload
from .history import (
    ChatMessage,
    FlowiseChatMessage,
    convert_from_message,
    convert_history_to_messages,
    convert_response_to_message,
)
from .prompt import convert_to_flowise_message

__all__ = [
    "ChatMessage",
    "FlowiseChatMessage",
    "convert_from_message",
    "convert_history_to_messages",
    "convert_response_to_message",
    "convert_to_flowise_message",
    "file_part",
    "to_file_payload",
]
