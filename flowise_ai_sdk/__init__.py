"""
Flowise AI SDK - typed streaming and upload negotiation for Flowise chatflows.

This package provides:
- Translation of Flowise's event stream into ordered protocol parts
  (stream-start, text-start, text-delta, text-end, finish)
- Upload negotiation for file attachments (inline, RAG and full-text extraction)
- An async HTTP client for the Flowise REST API
- Message converters, a CLI and an optional FastAPI streaming route

Token usage is estimated from word counts and is approximate.
"""

__version__ = "0.1.0"

from .client import FlowiseClient
from .config import FlowiseClientOptions
from .converters import convert_to_flowise_message, file_part, to_file_payload
from .core.normalization import estimate_tokens
from .models import (
    CallWarning,
    ClassifiedUpload,
    ConversationTurn,
    FilePart,
    GenerateResult,
    PredictionRequest,
    StreamPart,
    StreamResult,
    TextPart,
    TurnRole,
    UploadConfig,
    UploadMode,
    Usage,
)
from .observability import Logger, SilentLogger, StructuredLogger, get_logger, set_logger
from .providers import AttachmentError, ProviderError, UnsupportedFunctionalityError
from .providers.flowise import (
    FlowiseChatModel,
    FlowiseProvider,
    create_flowise_model,
    create_flowise_provider,
)
from .streaming import StreamTranslator
from .uploads import AttachmentExtractor, UploadClassifier, UploadConfigResolver

__all__ = [
    # Provider
    "create_flowise_provider",
    "create_flowise_model",
    "FlowiseProvider",
    "FlowiseChatModel",
    "FlowiseClient",
    "FlowiseClientOptions",

    # Core components
    "StreamTranslator",
    "UploadConfigResolver",
    "UploadClassifier",
    "AttachmentExtractor",
    "estimate_tokens",

    # Models
    "ConversationTurn",
    "TurnRole",
    "TextPart",
    "FilePart",
    "UploadConfig",
    "UploadMode",
    "ClassifiedUpload",
    "PredictionRequest",
    "StreamPart",
    "StreamResult",
    "GenerateResult",
    "CallWarning",
    "Usage",

    # Converters
    "convert_to_flowise_message",
    "file_part",
    "to_file_payload",

    # Logging
    "Logger",
    "SilentLogger",
    "StructuredLogger",
    "get_logger",
    "set_logger",

    # Errors
    "ProviderError",
    "AttachmentError",
    "UnsupportedFunctionalityError",
]
