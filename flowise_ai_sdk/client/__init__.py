"""HTTP client for the Flowise REST API."""

from .flowise_client import FlowiseClient

__all__ = ["FlowiseClient"]
