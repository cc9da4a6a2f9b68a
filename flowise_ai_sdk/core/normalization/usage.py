"""
Usage estimation.

Flowise does not report token usage, so usage is estimated from word
counts: ``ceil(words * 1.3)``. These numbers are approximate and should
never be presented as exact tokenizer counts.
"""

from ...config.constants import TOKENS_PER_WORD_DENOMINATOR, TOKENS_PER_WORD_NUMERATOR
from ...models.generation import Usage


def estimate_tokens(text: str) -> int:
    """
    Estimate the token count of ``text``.

    Words are runs of non-whitespace after trimming; the empty string is
    zero tokens. Integer arithmetic avoids float rounding at the ceiling.

    Args:
        text: Text to estimate

    Returns:
        Approximate token count
    """
    if not text:
        return 0
    words = len(text.split())
    return -(-words * TOKENS_PER_WORD_NUMERATOR // TOKENS_PER_WORD_DENOMINATOR)


def estimate_usage(question: str, output_tokens: int) -> Usage:
    """Build a Usage from the prompt text and an output token count."""
    input_tokens = estimate_tokens(question)
    return Usage(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        total_tokens=input_tokens + output_tokens,
    )
