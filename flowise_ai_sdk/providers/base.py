"""
Base exceptions for the Flowise provider.

Transport failures are fatal and surface as ProviderError with a
backend-specific message prefix, so callers can tell them apart from the
non-fatal warnings returned alongside successful results.
"""

from typing import Optional


class ProviderError(Exception):
    """
    Base exception for provider-related errors.

    This should be raised for:
    - API transport errors
    - Non-2xx responses from the prediction endpoints
    - Authentication failures

    Attributes:
        message: Error message
        provider: Provider name
        status_code: HTTP status code if applicable
        retry_after: Seconds to wait before retry if applicable
        is_retryable: Whether the error would be worth retrying
        original_error: The original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        provider: str = "flowise",
        status_code: Optional[int] = None,
        retry_after: Optional[float] = None
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.retry_after = retry_after
        self.is_retryable = False  # Set by the error mapper
        self.original_error: Optional[BaseException] = None


class AttachmentError(ProviderError):
    """An attachment could not be normalized (unsupported payload or failed download)."""


class UnsupportedFunctionalityError(Exception):
    """Raised for content or model functions Flowise does not support."""

    def __init__(self, functionality: str):
        super().__init__(f"'{functionality}' functionality not supported by Flowise")
        self.functionality = functionality
