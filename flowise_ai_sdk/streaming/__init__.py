"""Streaming layer: SSE parsing and backend event translation.

This layer handles:
- Decoding Flowise's server-sent events into event records
- Translating backend events into ordered protocol parts
- Keeping the text block invariants even when the backend misbehaves
"""

from .sse import iter_sse_events, parse_sse_line
from .translator import StreamTranslator, TranslatorState, translate_stream

__all__ = [
    "StreamTranslator",
    "TranslatorState",
    "iter_sse_events",
    "parse_sse_line",
    "translate_stream",
]
