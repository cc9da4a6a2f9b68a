"""Server-sent event parsing for the Flowise prediction stream."""

import json
from typing import Any, AsyncIterator, Dict, Optional

from ..config.constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..observability.logging import Logger, get_logger


def parse_sse_line(line: str) -> Optional[Any]:
    """
    Decode one SSE line.

    Returns:
        The decoded JSON payload of a ``data:`` line, SSE_DONE_SENTINEL for
        the terminator, or None for anything else (comments, ``event:``
        lines, blank keep-alives, unparseable data).
    """
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    data = line[len(SSE_DATA_PREFIX):].strip()
    if not data:
        return None
    if data == SSE_DONE_SENTINEL:
        return SSE_DONE_SENTINEL
    try:
        return json.loads(data)
    except ValueError:
        return None


async def iter_sse_events(
    lines: AsyncIterator[str],
    logger: Optional[Logger] = None,
) -> AsyncIterator[Dict[str, Any]]:
    """
    Yield decoded event records from an async iterator of text lines.

    Stops at ``[DONE]``. Lines that do not decode to a JSON object are
    skipped with a debug log.
    """
    logger = logger or get_logger()
    async for line in lines:
        parsed = parse_sse_line(line)
        if parsed is None:
            if line.strip():
                logger.debug("Skipping non-event SSE line", line=line[:200])
            continue
        if parsed == SSE_DONE_SENTINEL:
            return
        if not isinstance(parsed, dict):
            logger.debug("Skipping non-object SSE payload", payload=str(parsed)[:200])
            continue
        yield parsed
