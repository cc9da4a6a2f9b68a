"""
Pluggable logging for the SDK components.

Every component accepts a logger in its constructor. When none is given it
falls back to the process-wide logger, which starts out as a no-op
SilentLogger and can be replaced once at startup with set_logger().

StructuredLogger routes messages to the standard logging module with
structured fields like provider, chatflow_id and request_id.
"""

import logging
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Logger(Protocol):
    """Three-level logger interface consumed by the SDK."""

    def debug(self, message: str, **context: Any) -> None: ...

    def warn(self, message: str, **context: Any) -> None: ...

    def error(self, message: str, **context: Any) -> None: ...


class SilentLogger:
    """Logger that discards everything."""

    def debug(self, message: str, **context: Any) -> None:
        pass

    def warn(self, message: str, **context: Any) -> None:
        pass

    def error(self, message: str, **context: Any) -> None:
        pass


class StructuredLogger:
    """Structured logger backed by the standard logging module."""

    def __init__(self, component: str, provider: str = "flowise"):
        """
        Initialize logger for a specific SDK component.

        Args:
            component: Component name (e.g., "streaming", "uploads")
            provider: Provider name included in every record
        """
        self.component = component
        self.provider = provider
        self.logger = logging.getLogger(f"flowise_ai_sdk.{component}")

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured fields."""
        fields = [f"provider={self.provider}"]

        for key, value in kwargs.items():
            if value is not None:
                fields.append(f"{key}={value}")

        return f"[{' '.join(fields)}] {message}"

    def debug(self, message: str, **context: Any) -> None:
        """Log debug message with structured fields."""
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format_message(message, **context))

    def warn(self, message: str, **context: Any) -> None:
        """Log warning message with structured fields."""
        self.logger.warning(self._format_message(message, **context))

    def error(self, message: str, error: Optional[BaseException] = None, **context: Any) -> None:
        """Log error message with structured fields."""
        if error is not None:
            context["error_type"] = type(error).__name__
            context["error_msg"] = str(error)

        self.logger.error(self._format_message(message, **context))


_global_logger: Logger = SilentLogger()


def set_logger(logger: Logger) -> None:
    """Replace the process-wide logger used by components built without one."""
    global _global_logger
    _global_logger = logger


def get_logger() -> Logger:
    """Return the process-wide logger."""
    return _global_logger
