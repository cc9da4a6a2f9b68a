"""
Upload config resolution.

Different Flowise deployments expose different subsets of the config
endpoints depending on authentication and public-sharing settings, so the
resolver tries them in a fixed priority order and takes the first that
answers. It never raises: if nothing answers, uploads fall back to the
empty config.
"""

import json
from typing import Any, Awaitable, Callable, Optional

import httpx

from ..config.constants import (
    CHATFLOW_PATH,
    CHATFLOW_UPLOADS_PATH,
    PUBLIC_CHATBOT_CONFIG_PATH,
)
from ..models.uploads import UploadConfig
from ..observability.logging import Logger, get_logger

FetchWithAuth = Callable[..., Awaitable[httpx.Response]]


class ConfigSourceError(Exception):
    """A config endpoint answered with something unusable."""


class UploadConfigResolver:
    """Resolves the UploadConfig of a chatflow."""

    def __init__(self, fetch_with_auth: FetchWithAuth, logger: Optional[Logger] = None):
        self.fetch_with_auth = fetch_with_auth
        self.logger = logger or get_logger()

    async def resolve(self, chatflow_id: str) -> UploadConfig:
        """
        Fetch and merge the upload config for ``chatflow_id``.

        Tries the authenticated chatflow detail, the public chatbot config and
        the uploads endpoint, in that order.
        """
        sources = (
            ("authenticated chatflow config", CHATFLOW_PATH, self._from_chatflow),
            ("public chatflow config", PUBLIC_CHATBOT_CONFIG_PATH, self._from_public_config),
            ("uploads config", CHATFLOW_UPLOADS_PATH, UploadConfig.from_payload),
        )
        for name, path_template, parse in sources:
            path = path_template.format(chatflow_id=chatflow_id)
            try:
                body = await self._fetch_json(path)
                config = parse(body)
            except Exception as e:
                self.logger.warn(f"Failed to fetch {name}", chatflow_id=chatflow_id, path=path, error=str(e))
                continue
            self.logger.debug(f"Resolved upload config from {name}", chatflow_id=chatflow_id, config=config.model_dump())
            return config

        self.logger.warn("No upload config source answered, using empty config", chatflow_id=chatflow_id)
        return UploadConfig()

    async def _fetch_json(self, path: str) -> Any:
        response = await self.fetch_with_auth(path)
        if not response.is_success:
            raise ConfigSourceError(f"HTTP {response.status_code}")
        return response.json()

    @staticmethod
    def _from_chatflow(body: Any) -> UploadConfig:
        chatbot_config = body.get("chatbotConfig") if isinstance(body, dict) else None
        if not isinstance(chatbot_config, str):
            raise ConfigSourceError("chatflow has no chatbotConfig")
        return UploadConfig.from_payload(json.loads(chatbot_config))

    @staticmethod
    def _from_public_config(body: Any) -> UploadConfig:
        if not isinstance(body, dict):
            raise ConfigSourceError("public config is not an object")
        config = body.get("chatbotConfig") or body
        if isinstance(config, str):
            config = json.loads(config)
        return UploadConfig.from_payload(config)
