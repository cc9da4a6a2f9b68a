"""Protocol parts emitted by the stream translator.

The ``type`` tags and the keys produced by ``to_dict`` are the wire
contract consumed by client tooling and must not change.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from .generation import Usage


@dataclass(frozen=True)
class StreamStartPart:
    """First part of every translated stream."""
    warnings: List[Any] = field(default_factory=list)
    type: str = field(default="stream-start", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "warnings": list(self.warnings)}


@dataclass(frozen=True)
class TextStartPart:
    """Opens the text block ``id``."""
    id: str
    type: str = field(default="text-start", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "id": self.id}


@dataclass(frozen=True)
class TextDeltaPart:
    """A chunk of text for an open block."""
    id: str
    delta: str
    type: str = field(default="text-delta", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "id": self.id, "delta": self.delta}


@dataclass(frozen=True)
class TextEndPart:
    """Closes the text block ``id``."""
    id: str
    type: str = field(default="text-end", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "id": self.id}


@dataclass(frozen=True)
class FinishPart:
    """Terminal part carrying estimated usage."""
    usage: Usage
    finish_reason: str = "stop"
    type: str = field(default="finish", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "usage": self.usage.to_wire(),
            "finishReason": self.finish_reason,
        }


StreamPart = Union[StreamStartPart, TextStartPart, TextDeltaPart, TextEndPart, FinishPart]
