from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution and directory creation utilities
shared by the configuration loader, the logging subsystem and the output
writer.
"""

import os
from typing import Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Structure4AI"
UNIX_APP_DIR_NAME = ".structure4ai"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/Structure4AI
    - Linux/Mac: ~/.structure4ai

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def resolve_output_target(output_path: str, root_path: str) -> Tuple[str, str]:
    """
    Split an output path into its destination directory and base file name.

    Relative paths are anchored at the walked root. The extension of the
    given file name is discarded because each generator supplies its own.

    Args:
        output_path: User-supplied output path (file name or full path).
        root_path: Absolute root of the walked tree.

    Returns:
        Tuple[str, str]: (output directory, base name without extension).
    """
    raw = os.path.expandvars(os.path.expanduser(output_path.strip()))
    if not os.path.isabs(raw):
        raw = os.path.join(root_path, raw)
    raw = os.path.abspath(raw)

    directory = os.path.dirname(raw)
    stem, _ext = os.path.splitext(os.path.basename(raw))
    return directory, stem or "project-structure"

# -----------------------------------------------------------------------------
# FILESYSTEM MUTATION API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
