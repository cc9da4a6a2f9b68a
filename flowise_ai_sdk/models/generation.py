from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, AsyncIterator, Dict, List, Optional

from .uploads import ClassifiedUpload


class Usage(BaseModel):
    """Token usage. Values are word-count estimates, not tokenizer counts."""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def to_wire(self) -> Dict[str, int]:
        return {
            "inputTokens": self.input_tokens,
            "outputTokens": self.output_tokens,
            "totalTokens": self.total_tokens,
        }


class CallWarning(BaseModel):
    """Non-fatal condition surfaced alongside a successful result."""
    type: str = "other"
    message: str


class PredictionRequest(BaseModel):
    """Request body for the Flowise prediction endpoint."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: str
    chat_id: Optional[str] = None
    override_config: Optional[Dict[str, Any]] = None
    streaming: bool = False
    uploads: Optional[List[ClassifiedUpload]] = None
    lead_email: Optional[str] = None
    action: Optional[Any] = None
    human_input: Optional[Any] = None
    form: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON body with camelCase keys and unset fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PredictionResponse(BaseModel):
    """Non-streaming prediction result. Unknown fields are kept."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    text: Optional[str] = None
    question: Optional[str] = None
    chat_id: Optional[str] = None
    chat_message_id: Optional[str] = None
    session_id: Optional[str] = None
    memory_type: Optional[str] = None
    source_documents: Optional[List[Any]] = None
    used_tools: Optional[List[Any]] = None
    file_annotations: Optional[List[Any]] = None
    artifacts: Optional[List[Any]] = None
    agent_reasoning: Optional[List[Any]] = None
    action: Optional[Any] = None
    flow_variables: Optional[Dict[str, Any]] = None
    follow_up_prompts: Optional[str] = None
    is_stream_valid: Optional[bool] = None
    execution_id: Optional[str] = None
    agent_flow_executed_data: Optional[Any] = None


class PreparedRequest(BaseModel):
    """A prediction request plus the warnings gathered while building it."""
    request: PredictionRequest
    warnings: List[CallWarning] = Field(default_factory=list)


class GenerateResult(BaseModel):
    """Result of a non-streaming generation."""
    text: str
    finish_reason: str = "stop"
    usage: Usage
    warnings: List[CallWarning] = Field(default_factory=list)
    chat_id: Optional[str] = None
    response: Optional[PredictionResponse] = None


class StreamResult:
    """Result of a streaming generation.

    ``stream`` yields protocol parts and must be consumed (or closed) by
    exactly one consumer.
    """

    def __init__(self, stream: AsyncIterator[Any], request: PredictionRequest,
                 warnings: Optional[List[CallWarning]] = None):
        self.stream = stream
        self.request = request
        self.warnings = warnings or []

    @property
    def chat_id(self) -> Optional[str]:
        return self.request.chat_id

    def __aiter__(self):
        return self.stream.__aiter__()

    async def aclose(self) -> None:
        """Stop the stream and release the upstream connection."""
        aclose = getattr(self.stream, "aclose", None)
        if aclose is not None:
            await aclose()
