"""Normalization helpers."""

from .usage import estimate_tokens, estimate_usage

__all__ = ["estimate_tokens", "estimate_usage"]
