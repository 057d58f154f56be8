from __future__ import annotations

"""
Output Document Model.

The value returned by every generator: rendered content plus the file
extension and display name of the format that produced it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OutputDocument:
    """
    Rendered output of a single generator call.

    Attributes:
        content: Full text of the document.
        extension: Target file extension, without the leading dot.
        format_name: Human readable format name.
    """
    content: str
    extension: str
    format_name: str
