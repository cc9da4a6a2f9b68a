"""Conversion of a prompt into the single ``question`` string Flowise expects."""

from ..models.conversation_types import ConversationTurn, FilePart, Prompt, TextPart, TurnRole
from ..providers.base import UnsupportedFunctionalityError


def _turn_text(turn: ConversationTurn) -> str:
    texts = []
    for part in turn.parts():
        if isinstance(part, TextPart):
            texts.append(part.text)
        elif isinstance(part, FilePart):
            # Files travel as uploads, not as question text
            continue
        else:
            raise UnsupportedFunctionalityError(f"content type {getattr(part, 'type', type(part).__name__)}")
    return "".join(texts)


def convert_to_flowise_message(prompt: Prompt) -> str:
    """
    Flatten a prompt into a question.

    A single user turn is sent as its bare text. Longer conversations are
    rendered as ``User: ...`` / ``Assistant: ...`` lines; Flowise history has
    only those two roles, so system turns are labelled ``Assistant``.
    """
    if len(prompt) == 1 and prompt[0].role == TurnRole.USER:
        return _turn_text(prompt[0])

    lines = []
    for turn in prompt:
        label = "User" if turn.role == TurnRole.USER else "Assistant"
        lines.append(f"{label}: {_turn_text(turn)}")
    return "\n".join(lines)
