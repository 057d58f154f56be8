from __future__ import annotations

"""
Icon Lookup Tables.

Maps folder names, well-known file names and extensions to the glyphs shown
in front of each tree entry. Two variants exist: Unicode pictographs for
saved documents and bracketed ASCII tags for plain consoles.
"""

import os
from typing import Dict, List, Tuple

DEFAULT_FOLDER_ICON = "📁"
DEFAULT_FILE_ICON = "📄"
DEFAULT_CONSOLE_FOLDER_ICON = "[DIR]"
DEFAULT_CONSOLE_FILE_ICON = "[FILE]"

ROOT_ICON = "📂"
ACCESS_DENIED_ICON = "🔒"
ERROR_ICON = "❌"

# -----------------------------------------------------------------------------
# LOOKUP TABLES
# -----------------------------------------------------------------------------

# name -> (unicode, console)
_FOLDER_ICONS: Dict[str, Tuple[str, str]] = {
    "controllers": ("📁", "[CTRL]"),
    "models": ("📁", "[MODEL]"),
    "views": ("📁", "[VIEW]"),
    "data": ("📊", "[DATA]"),
    "services": ("⚙️", "[SVC]"),
    "repository": ("🗄️", "[REPO]"),
    "repositories": ("🗄️", "[REPO]"),
    "config": ("⚙️", "[CFG]"),
    "configuration": ("⚙️", "[CFG]"),
    "assets": ("🎨", "[ASSET]"),
    "images": ("🖼️", "[IMG]"),
    "img": ("🖼️", "[IMG]"),
    "css": ("🎨", "[CSS]"),
    "styles": ("🎨", "[CSS]"),
    "js": ("📜", "[JS]"),
    "javascript": ("📜", "[JS]"),
    "scripts": ("📜", "[JS]"),
    "fonts": ("🔤", "[FONT]"),
    "docs": ("📚", "[DOCS]"),
    "documentation": ("📚", "[DOCS]"),
    "tests": ("🧪", "[TEST]"),
    "test": ("🧪", "[TEST]"),
    "bin": ("⚙️", "[BIN]"),
    "obj": ("⚙️", "[OBJ]"),
    "wwwroot": ("🌐", "[WWW]"),
    "public": ("🌐", "[PUB]"),
    "src": ("📂", "[SRC]"),
    "source": ("📂", "[SRC]"),
    "lib": ("📚", "[LIB]"),
    "libraries": ("📚", "[LIB]"),
    "utils": ("🔧", "[UTIL]"),
    "utilities": ("🔧", "[UTIL]"),
    "helpers": ("🔧", "[HELP]"),
    "migrations": ("🗃️", "[MIG]"),
    "logs": ("📋", "[LOG]"),
    "temp": ("🗂️", "[TMP]"),
    "tmp": ("🗂️", "[TMP]"),
    "backup": ("💾", "[BAK]"),
    "backups": ("💾", "[BAK]"),
}

# Checked in order against the lower-cased file name
_NAME_FRAGMENT_ICONS: List[Tuple[str, str, str]] = [
    ("readme", "📖", "[README]"),
    ("license", "📄", "[LIC]"),
    ("changelog", "📝", "[CHANGE]"),
    ("gitignore", "🚫", "[GIT]"),
    ("dockerfile", "🐳", "[DOCKER]"),
    ("makefile", "⚡", "[MAKE]"),
]

_EXTENSION_ICONS: Dict[str, Tuple[str, str]] = {
    ".cs": ("🔷", "[C#]"),
    ".csproj": ("📋", "[PROJ]"),
    ".sln": ("📂", "[SLN]"),
    ".config": ("⚙️", "[CFG]"),
    ".dll": ("⚙️", "[DLL]"),
    ".exe": ("⚡", "[EXE]"),
    ".html": ("🌐", "[HTML]"),
    ".htm": ("🌐", "[HTML]"),
    ".css": ("🎨", "[CSS]"),
    ".js": ("📜", "[JS]"),
    ".json": ("📄", "[JSON]"),
    ".xml": ("📄", "[XML]"),
    ".xaml": ("🎨", "[XAML]"),
    ".sql": ("🗃️", "[SQL]"),
    ".db": ("🗄️", "[DB]"),
    ".sqlite": ("🗄️", "[DB]"),
    ".mdf": ("🗄️", "[DB]"),
    ".ldf": ("🗄️", "[DB]"),
    ".jpg": ("🖼️", "[JPG]"),
    ".jpeg": ("🖼️", "[JPG]"),
    ".png": ("🖼️", "[PNG]"),
    ".gif": ("🖼️", "[GIF]"),
    ".svg": ("🎨", "[SVG]"),
    ".ico": ("🖼️", "[ICO]"),
    ".bmp": ("🖼️", "[BMP]"),
    ".txt": ("📄", "[TXT]"),
    ".md": ("📖", "[MD]"),
    ".pdf": ("📕", "[PDF]"),
    ".doc": ("📘", "[DOC]"),
    ".docx": ("📘", "[DOC]"),
    ".xls": ("📊", "[XLS]"),
    ".xlsx": ("📊", "[XLS]"),
    ".ppt": ("📊", "[PPT]"),
    ".pptx": ("📊", "[PPT]"),
    ".zip": ("📦", "[ZIP]"),
    ".rar": ("📦", "[RAR]"),
    ".7z": ("📦", "[7Z]"),
    ".tar": ("📦", "[TAR]"),
    ".yml": ("⚙️", "[YML]"),
    ".yaml": ("⚙️", "[YML]"),
    ".toml": ("⚙️", "[TOML]"),
    ".ini": ("⚙️", "[INI]"),
    ".conf": ("⚙️", "[CONF]"),
    ".log": ("📋", "[LOG]"),
    ".tmp": ("🗂️", "[TMP]"),
    ".bak": ("💾", "[BAK]"),
    ".py": ("🐍", "[PY]"),
    ".java": ("☕", "[JAVA]"),
    ".cpp": ("⚡", "[C++]"),
    ".c": ("⚡", "[C++]"),
    ".php": ("🌐", "[PHP]"),
    ".rb": ("💎", "[RB]"),
    ".go": ("🐹", "[GO]"),
    ".rs": ("⚡", "[RUST]"),
    ".ts": ("📜", "[TS]"),
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def get_icon(name: str, is_directory: bool) -> str:
    """
    Resolve the Unicode icon for a tree entry.

    Args:
        name: Base name of the entry.
        is_directory: Whether the entry is a directory.

    Returns:
        str: A single pictograph (possibly with a variation selector).
    """
    return _lookup(name, is_directory)[0]


def get_console_icon(name: str, is_directory: bool) -> str:
    """Resolve the bracketed ASCII tag for a tree entry."""
    return _lookup(name, is_directory)[1]


def _lookup(name: str, is_directory: bool) -> Tuple[str, str]:
    lowered = name.lower()

    if is_directory:
        return _FOLDER_ICONS.get(lowered, (DEFAULT_FOLDER_ICON, DEFAULT_CONSOLE_FOLDER_ICON))

    for fragment, icon, console_icon in _NAME_FRAGMENT_ICONS:
        if fragment in lowered:
            return icon, console_icon

    _, ext = os.path.splitext(lowered)
    return _EXTENSION_ICONS.get(ext, (DEFAULT_FILE_ICON, DEFAULT_CONSOLE_FILE_ICON))
