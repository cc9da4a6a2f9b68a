"""Configuration for the Flowise AI SDK."""

from .settings import FlowiseClientOptions

__all__ = ["FlowiseClientOptions"]
