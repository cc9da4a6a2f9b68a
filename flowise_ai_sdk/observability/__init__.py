"""Observability helpers: the pluggable SDK logger."""

from .logging import Logger, SilentLogger, StructuredLogger, get_logger, set_logger

__all__ = ["Logger", "SilentLogger", "StructuredLogger", "get_logger", "set_logger"]
