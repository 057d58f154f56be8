from __future__ import annotations

"""
Resilient File Reading Component.

Reads source files for the consolidated document. Undecodable byte
sequences are replaced instead of raising, so binary noise inside a text
file never aborts generation.
"""

from typing import Iterator


def stream_file_content(file_path: str) -> Iterator[str]:
    """
    Yield the file line by line with the 'replace' decoding strategy.

    Raises:
        OSError: If the file cannot be opened.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
        for line in f:
            yield line


def read_text_file(file_path: str) -> str:
    """
    Read a whole file as UTF-8 text.

    Args:
        file_path: Absolute path to the file.

    Returns:
        str: Decoded content.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    return "".join(stream_file_content(file_path))
