"""Provider exceptions and error mapping.

The Flowise chat model lives in ``flowise_ai_sdk.providers.flowise``.
"""

from .base import AttachmentError, ProviderError, UnsupportedFunctionalityError
from .errors import ErrorMapper

__all__ = [
    "AttachmentError",
    "ErrorMapper",
    "ProviderError",
    "UnsupportedFunctionalityError",
]
