from __future__ import annotations

"""
Output Persistence.

Writes rendered documents to disk. Each document goes to its own path, so
concurrent writes for different formats never touch the same file.
"""

import logging
import os

from structure4ai.domain.output_models import OutputDocument

logger = logging.getLogger(__name__)



def write_output_document(path: str, document: OutputDocument) -> str:
    """
    Write a document as UTF-8, creating parent directories and overwriting.

    Args:
        path: Destination file.
        document: Rendered output.

    Returns:
        str: The absolute path written.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    target = os.path.abspath(path)
    os.makedirs(os.path.dirname(target), exist_ok=True)
    with open(target, "w", encoding="utf-8", newline="\n") as f:
        f.write(document.content)
    logger.debug(f"{document.format_name} written to {target} ({len(document.content)} chars)")
    return target
