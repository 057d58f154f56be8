from __future__ import annotations

"""
Content Sanitization.

Removes control characters that would make an inlined source file render
badly or break the surrounding Markdown document.
"""

import re
from typing import Final

# Keeps TAB, LF, CR, printable ASCII and every code point from U+00A0 upwards
_CONTROL_CHARS: Final[re.Pattern] = re.compile(r"[^\t\n\r\x20-\x7e\u00a0-\U0010ffff]")


def clean_control_characters(text: str) -> str:
    """
    Replace each disallowed control character with a single space.

    Args:
        text: Raw file content.

    Returns:
        str: Content safe to embed in a fenced code block.
    """
    if not text:
        return ""
    return _CONTROL_CHARS.sub(" ", text)
