from __future__ import annotations

"""
Token Estimation.

Counts the tokens of the consolidated document with tiktoken so users can
judge whether it fits an LLM context window. A character-density heuristic
takes over when the encoding cannot be loaded (offline machines, missing
cached vocabulary).
"""

import functools
import logging
import math

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "o200k_base"
LEGACY_ENCODING = "cl100k_base"

# Approximately 4 characters per token for code and prose
CHARS_PER_TOKEN_AVG: int = 4


@functools.lru_cache(maxsize=4)
def _get_encoding(model: str) -> "tiktoken.Encoding":
    name = LEGACY_ENCODING if any(x in model.lower() for x in ("gpt-4-", "gpt-3.5")) else DEFAULT_ENCODING
    try:
        return tiktoken.get_encoding(name)
    except ValueError:
        logger.debug(f"Encoding '{name}' not found, falling back to {LEGACY_ENCODING}.")
        return tiktoken.get_encoding(LEGACY_ENCODING)


def estimate_tokens_heuristic(text: str) -> int:
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


def count_tokens(text: str, model: str = "gpt-4o") -> int:
    """
    Count tokens for `text`.

    Args:
        text: Content to measure.
        model: Model identifier used to pick the encoding.

    Returns:
        int: Token count, 0 for empty text.
    """
    if not text:
        return 0
    try:
        encoding = _get_encoding(model)
        return len(encoding.encode(text, disallowed_special=()))
    except Exception as e:
        logger.warning(f"Token encoding unavailable ({e}); using heuristic estimate.")
        return estimate_tokens_heuristic(text)
