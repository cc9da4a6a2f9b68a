"""
Error mapping utilities for the Flowise provider.

Converts transport exceptions into ProviderError instances with a
consistent message prefix and metadata.
"""

from typing import Any, Dict, Optional

import httpx

from .base import ProviderError


API_ERROR_PREFIX = "Flowise API error"
STREAMING_ERROR_PREFIX = "Flowise streaming error"


class ErrorMapper:
    """Maps transport errors to standardized ProviderError."""

    # Common HTTP status codes that indicate retryable errors
    RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

    @staticmethod
    def is_retryable(error: BaseException) -> bool:
        """
        Determine if an error is retryable.

        No retry is performed by the SDK; the flag is informational.

        Args:
            error: The exception to check

        Returns:
            bool: True if the error is retryable
        """
        status_code = getattr(error, "status_code", None)
        if status_code is None and isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
        if status_code in ErrorMapper.RETRYABLE_STATUS_CODES:
            return True

        if isinstance(error, (httpx.TimeoutException, httpx.ConnectError)):
            return True

        error_msg = str(error).lower()
        return any(phrase in error_msg for phrase in ["rate limit", "too many requests"])

    @staticmethod
    def get_retry_after(response: Optional[httpx.Response]) -> Optional[float]:
        """Extract the Retry-After header in seconds, if present."""
        if response is None:
            return None
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass
        return None

    @staticmethod
    def from_response(response: httpx.Response, prefix: str = API_ERROR_PREFIX) -> ProviderError:
        """
        Build a ProviderError for a non-2xx response.

        Uses the ``message`` field of a JSON error body when the server sends one.
        """
        message = f"HTTP error: {response.status_code}"
        try:
            data = response.json()
            if isinstance(data, dict) and data.get("message"):
                message = str(data["message"])
        except ValueError:
            pass

        error = ProviderError(
            message=f"{prefix}: {message}",
            status_code=response.status_code,
            retry_after=ErrorMapper.get_retry_after(response),
        )
        error.is_retryable = response.status_code in ErrorMapper.RETRYABLE_STATUS_CODES
        return error

    @staticmethod
    def map_flowise_error(error: BaseException, prefix: str = API_ERROR_PREFIX) -> ProviderError:
        """
        Map any exception raised while talking to Flowise to ProviderError.

        An existing ProviderError is returned unchanged so the prefix is
        never applied twice.

        Args:
            error: The exception to wrap
            prefix: Message prefix identifying the failing call

        Returns:
            ProviderError with appropriate metadata
        """
        if isinstance(error, ProviderError):
            return error

        response = getattr(error, "response", None) if isinstance(error, httpx.HTTPStatusError) else None
        status_code = response.status_code if response is not None else getattr(error, "status_code", None)

        provider_error = ProviderError(
            message=f"{prefix}: {error}",
            status_code=status_code,
            retry_after=ErrorMapper.get_retry_after(response),
        )
        provider_error.is_retryable = ErrorMapper.is_retryable(error)
        provider_error.original_error = error
        return provider_error

    @staticmethod
    def get_error_classification(error: ProviderError) -> Dict[str, Any]:
        """
        Get error classification details for logging.

        Args:
            error: The ProviderError to classify

        Returns:
            Dict with error classification details
        """
        return {
            "provider": error.provider,
            "status_code": error.status_code,
            "is_retryable": error.is_retryable,
            "retry_after": error.retry_after,
            "error_type": type(error.original_error).__name__ if error.original_error else None,
            "category": ErrorMapper._categorize_error(error),
        }

    @staticmethod
    def _categorize_error(error: ProviderError) -> str:
        """Categorize error for logging."""
        if error.status_code:
            if error.status_code == 401:
                return "authentication"
            elif error.status_code == 429:
                return "rate_limit"
            elif error.status_code >= 500:
                return "server_error"
            elif error.status_code >= 400:
                return "client_error"

        if isinstance(error.original_error, httpx.TimeoutException):
            return "timeout"
        if isinstance(error.original_error, httpx.TransportError):
            return "network"

        return "unknown"
