"""Factory functions for Flowise chat models."""

from typing import Optional

import httpx

from ...client.flowise_client import FlowiseClient
from ...config.settings import FlowiseClientOptions
from ...observability.logging import Logger, get_logger
from ..base import UnsupportedFunctionalityError
from .adapter import FlowiseChatModel


class FlowiseProvider:
    """
    Creates chat models that share one FlowiseClient.

    The provider is callable: ``provider("chatflow-id")`` is the same as
    ``provider.chat("chatflow-id")``.
    """

    def __init__(self, client: FlowiseClient, logger: Optional[Logger] = None):
        self.client = client
        self.logger = logger or client.logger

    def __call__(self, chatflow_id: str) -> FlowiseChatModel:
        return self.chat(chatflow_id)

    def chat(self, chatflow_id: str) -> FlowiseChatModel:
        """Create a chat model for ``chatflow_id``."""
        return FlowiseChatModel(chatflow_id, self.client, logger=self.logger)

    def language_model(self, chatflow_id: str) -> FlowiseChatModel:
        return self.chat(chatflow_id)

    def text_embedding_model(self, model_id: str):
        raise UnsupportedFunctionalityError(f"text embedding model '{model_id}'")

    async def aclose(self) -> None:
        await self.client.aclose()


def create_flowise_provider(
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
    logger: Optional[Logger] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FlowiseProvider:
    """
    Create a Flowise provider.

    Settings not passed explicitly are read from FLOWISE_BASE_URL,
    FLOWISE_API_KEY and FLOWISE_TIMEOUT.
    """
    options = FlowiseClientOptions.from_env(base_url=base_url, api_key=api_key, timeout=timeout)
    logger = logger or get_logger()
    client = FlowiseClient(options, http_client=http_client, logger=logger)
    return FlowiseProvider(client, logger=logger)


def create_flowise_model(chatflow_id: str, **options) -> FlowiseChatModel:
    """Create a chat model directly. Convenience for one-shot usage."""
    return create_flowise_provider(**options)(chatflow_id)
