"""
Translation of Flowise backend events into protocol parts.

The translator is a small state machine. It consumes backend events one at
a time and yields zero or more parts for each, guaranteeing that:

- ``stream-start`` is emitted at most once;
- ``text-start`` precedes every ``text-delta`` of the block;
- an opened block is closed by exactly one ``text-end`` before ``finish``
  or before a stream that ends without an ``end`` event terminates;
- nothing follows ``finish``.

A stream that is exhausted without an ``end`` event is repaired by closing
the open block; no ``finish`` is fabricated since usage would be unknown.
"""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, AsyncIterable, AsyncIterator, List, Optional

from ..core.normalization.usage import estimate_tokens, estimate_usage
from ..models.events import BackendEvent, BackendEventKind, INFORMATIONAL_EVENT_KINDS
from ..models.stream_parts import (
    FinishPart,
    StreamPart,
    StreamStartPart,
    TextDeltaPart,
    TextEndPart,
    TextStartPart,
)
from ..observability.logging import Logger, get_logger


class TranslatorState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    CLOSED = "closed"
    ERRORED = "errored"


class StreamTranslator:
    """Converts one backend event stream into protocol parts.

    An instance owns the state of a single stream and must not be reused.
    """

    def __init__(self, question: str, logger: Optional[Logger] = None, text_id: Optional[str] = None):
        """
        Args:
            question: Prompt text, used for the input token estimate
            logger: Logger; defaults to the process-wide SDK logger
            text_id: Id of the text block; a UUID is generated when omitted
        """
        self.question = question
        self.logger = logger or get_logger()
        self.text_id = text_id or str(uuid.uuid4())
        self.state = TranslatorState.IDLE
        self.stream_started = False
        self.text_block_open = False
        self.output_tokens = 0

    def translate(self, events: AsyncIterable[Any]) -> "TranslatedStream":
        """
        Return an async iterator of protocol parts for ``events``.

        Exceptions raised by ``events`` propagate after the translator moves
        to ERRORED; no further parts are emitted. The upstream iterator is
        closed on every exit path, including when the consumer stops early
        or closes the stream before pulling a part.
        """
        if self.state != TranslatorState.IDLE:
            raise RuntimeError("StreamTranslator instances translate a single stream")
        self.state = TranslatorState.STREAMING
        upstream = events.__aiter__()
        return TranslatedStream(self._translate(upstream), upstream)

    async def _translate(self, upstream: AsyncIterator[Any]) -> AsyncIterator[StreamPart]:
        try:
            async for raw in upstream:
                if raw is None:
                    continue
                for part in self.handle_event(BackendEvent.from_raw(raw)):
                    yield part
                if self.state == TranslatorState.CLOSED:
                    return

            if self.text_block_open:
                self.logger.debug("Stream ended without an end event, closing text block", id=self.text_id)
                self.text_block_open = False
                yield TextEndPart(id=self.text_id)
            self.state = TranslatorState.CLOSED
        except Exception as e:
            self.state = TranslatorState.ERRORED
            self.logger.error("Stream error", error=e)
            raise
        finally:
            aclose = getattr(upstream, "aclose", None)
            if aclose is not None:
                await aclose()

    def handle_event(self, event: BackendEvent) -> List[StreamPart]:
        """Apply one event to the state machine and return the parts it produces."""
        if self.state in (TranslatorState.CLOSED, TranslatorState.ERRORED):
            return []

        kind = event.known_kind
        if kind == BackendEventKind.START:
            return self._on_start()
        if kind == BackendEventKind.TOKEN:
            return self._on_token(event.data)
        if kind == BackendEventKind.END:
            return self._on_end()
        if kind == BackendEventKind.ERROR:
            self.logger.error("Error event received", data=event.data)
            return []
        if kind in INFORMATIONAL_EVENT_KINDS:
            self.logger.debug(f"{event.kind} event received", data=event.data)
            return []

        self.logger.warn("Skipping unknown event type", kind=event.kind, data=event.data)
        return []

    def _on_start(self) -> List[StreamPart]:
        if self.stream_started:
            return []
        self.stream_started = True
        return [StreamStartPart(warnings=[])]

    def _on_token(self, data: Any) -> List[StreamPart]:
        if not isinstance(data, str) or not data:
            return []
        parts: List[StreamPart] = []
        if not self.text_block_open:
            self.text_block_open = True
            parts.append(TextStartPart(id=self.text_id))
        self.output_tokens += estimate_tokens(data)
        parts.append(TextDeltaPart(id=self.text_id, delta=data))
        return parts

    def _on_end(self) -> List[StreamPart]:
        parts: List[StreamPart] = []
        if self.text_block_open:
            self.text_block_open = False
            parts.append(TextEndPart(id=self.text_id))
        parts.append(FinishPart(usage=estimate_usage(self.question, self.output_tokens), finish_reason="stop"))
        self.state = TranslatorState.CLOSED
        return parts


class TranslatedStream:
    """Protocol parts of one stream. ``aclose`` also closes the upstream iterator."""

    def __init__(self, parts: AsyncIterator[StreamPart], upstream: AsyncIterator[Any]):
        self._parts = parts
        self._upstream = upstream

    def __aiter__(self) -> "TranslatedStream":
        return self

    async def __anext__(self) -> StreamPart:
        return await self._parts.__anext__()

    async def aclose(self) -> None:
        try:
            await self._parts.aclose()
        finally:
            # An unstarted generator never reaches its own cleanup
            aclose = getattr(self._upstream, "aclose", None)
            if aclose is not None:
                await aclose()


def translate_stream(
    events: AsyncIterable[Any],
    question: str,
    logger: Optional[Logger] = None,
) -> TranslatedStream:
    """Translate ``events`` with a fresh StreamTranslator."""
    return StreamTranslator(question, logger=logger).translate(events)
