from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Literal, Optional, Union
from enum import Enum


class TurnRole(str, Enum):
    """Conversation turn roles."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class DataUrlPayload(BaseModel):
    """File bytes already encoded as a ``data:<mime>;base64,`` URI."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["data-url"] = "data-url"
    url: str


class Base64Payload(BaseModel):
    """File bytes as a bare base64 string without the data-URI prefix."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["base64"] = "base64"
    data: str


class RemoteUrlPayload(BaseModel):
    """File that must be downloaded before it can be uploaded."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["url"] = "url"
    url: str


class BinaryPayload(BaseModel):
    """Raw file bytes."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["binary"] = "binary"
    data: bytes


FilePayload = Annotated[
    Union[DataUrlPayload, Base64Payload, RemoteUrlPayload, BinaryPayload],
    Field(discriminator="kind"),
]


class TextPart(BaseModel):
    """Plain text content of a turn."""
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class FilePart(BaseModel):
    """A file attached to a turn."""
    model_config = ConfigDict(frozen=True)

    type: Literal["file"] = "file"
    filename: Optional[str] = None
    media_type: Optional[str] = None
    data: FilePayload


ContentPart = Annotated[Union[TextPart, FilePart], Field(discriminator="type")]


class ConversationTurn(BaseModel):
    """One turn of the prompt: a role plus text or an ordered list of parts."""

    role: TurnRole
    content: Union[str, List[ContentPart]]

    @classmethod
    def user(cls, *content: Union[str, TextPart, FilePart]) -> "ConversationTurn":
        """Build a user turn; bare strings become text parts."""
        return cls(role=TurnRole.USER, content=_as_parts(content))

    @classmethod
    def assistant(cls, text: str) -> "ConversationTurn":
        return cls(role=TurnRole.ASSISTANT, content=text)

    @classmethod
    def system(cls, text: str) -> "ConversationTurn":
        return cls(role=TurnRole.SYSTEM, content=text)

    def parts(self) -> List[Union[TextPart, FilePart]]:
        """Content as a list of parts, wrapping plain string content."""
        if isinstance(self.content, str):
            return [TextPart(text=self.content)]
        return list(self.content)


def _as_parts(content) -> Union[str, List[Union[TextPart, FilePart]]]:
    if len(content) == 1 and isinstance(content[0], str):
        return content[0]
    return [TextPart(text=item) if isinstance(item, str) else item for item in content]


Prompt = List[ConversationTurn]
