"""Backend event models.

Flowise streams loosely-typed records tagged with an ``event`` name. This
module gives them a single typed shape before they reach the translator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class BackendEventKind(str, Enum):
    """Event kinds emitted by the Flowise prediction stream."""
    START = "start"
    TOKEN = "token"
    END = "end"
    ERROR = "error"
    SOURCE_DOCUMENTS = "sourceDocuments"
    USED_TOOLS = "usedTools"
    AGENT_REASONING = "agentReasoning"
    METADATA = "metadata"
    ARTIFACTS = "artifacts"
    FILE_ANNOTATIONS = "fileAnnotations"
    TOOL = "tool"
    NEXT_AGENT = "nextAgent"
    AGENT_FLOW_EVENT = "agentFlowEvent"
    AGENT_FLOW_EXECUTED_DATA = "agentFlowExecutedData"
    NEXT_AGENT_FLOW = "nextAgentFlow"
    ACTION = "action"
    ABORT = "abort"


# Kinds that are acknowledged but never produce protocol output
INFORMATIONAL_EVENT_KINDS = frozenset({
    BackendEventKind.SOURCE_DOCUMENTS,
    BackendEventKind.USED_TOOLS,
    BackendEventKind.AGENT_REASONING,
    BackendEventKind.METADATA,
    BackendEventKind.ARTIFACTS,
    BackendEventKind.FILE_ANNOTATIONS,
    BackendEventKind.TOOL,
    BackendEventKind.NEXT_AGENT,
    BackendEventKind.AGENT_FLOW_EVENT,
    BackendEventKind.AGENT_FLOW_EXECUTED_DATA,
    BackendEventKind.NEXT_AGENT_FLOW,
    BackendEventKind.ACTION,
    BackendEventKind.ABORT,
})


@dataclass(frozen=True)
class BackendEvent:
    """One record of the backend stream.

    ``kind`` stays a plain string so unknown kinds survive parsing; use
    ``known_kind`` to match against BackendEventKind.
    """
    kind: str
    data: Any = None
    raw: Any = None

    @property
    def known_kind(self) -> Optional[BackendEventKind]:
        try:
            return BackendEventKind(self.kind)
        except ValueError:
            return None

    @classmethod
    def from_raw(cls, raw: Any) -> "BackendEvent":
        """Build an event from a decoded SSE record or an SDK object."""
        if isinstance(raw, BackendEvent):
            return raw
        if isinstance(raw, Mapping):
            return cls(kind=str(raw.get("event", "")), data=raw.get("data"), raw=raw)
        return cls(
            kind=str(getattr(raw, "event", "")),
            data=getattr(raw, "data", None),
            raw=raw,
        )
