"""Flowise chat model and provider factory."""

from .adapter import FlowiseChatModel
from .provider import FlowiseProvider, create_flowise_model, create_flowise_provider

__all__ = [
    "FlowiseChatModel",
    "FlowiseProvider",
    "create_flowise_model",
    "create_flowise_provider",
]
