"""Data models shared across the SDK."""

from .conversation_types import (
    Base64Payload,
    BinaryPayload,
    ConversationTurn,
    DataUrlPayload,
    FilePart,
    Prompt,
    RemoteUrlPayload,
    TextPart,
    TurnRole,
)
from .events import BackendEvent, BackendEventKind, INFORMATIONAL_EVENT_KINDS
from .generation import (
    CallWarning,
    GenerateResult,
    PredictionRequest,
    PredictionResponse,
    PreparedRequest,
    StreamResult,
    Usage,
)
from .stream_parts import (
    FinishPart,
    StreamPart,
    StreamStartPart,
    TextDeltaPart,
    TextEndPart,
    TextStartPart,
)
from .uploads import (
    ClassifiedUpload,
    FileUploadConstraint,
    UploadConfig,
    UploadMode,
    UploadTransformResult,
)

__all__ = [
    "Base64Payload",
    "BinaryPayload",
    "ConversationTurn",
    "DataUrlPayload",
    "FilePart",
    "Prompt",
    "RemoteUrlPayload",
    "TextPart",
    "TurnRole",
    "BackendEvent",
    "BackendEventKind",
    "INFORMATIONAL_EVENT_KINDS",
    "CallWarning",
    "GenerateResult",
    "PredictionRequest",
    "PredictionResponse",
    "PreparedRequest",
    "StreamResult",
    "Usage",
    "FinishPart",
    "StreamPart",
    "StreamStartPart",
    "TextDeltaPart",
    "TextEndPart",
    "TextStartPart",
    "ClassifiedUpload",
    "FileUploadConstraint",
    "UploadConfig",
    "UploadMode",
    "UploadTransformResult",
]
