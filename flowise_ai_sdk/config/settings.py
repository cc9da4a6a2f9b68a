"""Connection settings for the Flowise client."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .constants import (
    API_KEY_ENV_VAR,
    BASE_URL_ENV_VAR,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    TIMEOUT_ENV_VAR,
)


class FlowiseClientOptions(BaseModel):
    """Options used to construct a FlowiseClient."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Flowise server root URL")
    api_key: Optional[str] = Field(None, description="Bearer token for the Flowise API")
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Request timeout in seconds")

    @field_validator("base_url")
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @classmethod
    def from_env(cls, **overrides) -> "FlowiseClientOptions":
        """
        Build options from environment variables (and a .env file if present).

        Explicit keyword overrides that are not None take precedence.
        """
        load_dotenv()
        values = {
            "base_url": os.getenv(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL,
            "api_key": os.getenv(API_KEY_ENV_VAR) or None,
        }
        timeout = os.getenv(TIMEOUT_ENV_VAR)
        if timeout:
            values["timeout"] = float(timeout)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
