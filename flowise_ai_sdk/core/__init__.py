"""Core helpers shared by the streaming and request-building layers."""

from .normalization import estimate_tokens, estimate_usage

__all__ = ["estimate_tokens", "estimate_usage"]
