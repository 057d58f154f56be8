from __future__ import annotations

"""
Unit tests for the tree line renderer and the icon lookup tables.
"""

import pytest

from structure4ai.core.analysis.icons import (
    DEFAULT_CONSOLE_FILE_ICON,
    DEFAULT_FILE_ICON,
    DEFAULT_FOLDER_ICON,
    get_console_icon,
    get_icon,
)
from structure4ai.core.analysis.tree_renderer import (
    child_prefix,
    render_access_denied_line,
    render_entry_line,
    render_node_error_line,
    render_root_line,
    render_tree_lines,
)


def test_connectors_and_prefixes() -> None:
    """TC-01: Last children use the corner connector and blank continuation."""
    assert render_entry_line("", False, "📄", "a.txt") == "├── 📄 a.txt"
    assert render_entry_line("", True, "📄", "b.txt") == "└── 📄 b.txt"
    assert child_prefix("", False) == "│   "
    assert child_prefix("│   ", True) == "│       "


def test_error_lines() -> None:
    assert render_access_denied_line("    ") == "    └── 🔒 [Access Denied]"
    assert render_node_error_line("", True, "x.bin", "boom") == "└── ❌ x.bin [Error: boom]"


def test_tree_lines_start_with_root() -> None:
    lines = render_tree_lines("demo", ["└── 📄 a.txt"])
    assert lines == [render_root_line("demo"), "└── 📄 a.txt"]
    assert lines[0] == "📂 demo"


@pytest.mark.parametrize(
    "name, is_dir, expected",
    [
        ("src", True, "📂"),
        ("Tests", True, "🧪"),
        ("random_folder", True, DEFAULT_FOLDER_ICON),
        ("README.md", False, "📖"),
        ("Dockerfile", False, "🐳"),
        ("app.py", False, "🐍"),
        ("Program.CS", False, "🔷"),
        ("unknown.xyz", False, DEFAULT_FILE_ICON),
        ("noext", False, DEFAULT_FILE_ICON),
    ],
)
def test_unicode_icons(name: str, is_dir: bool, expected: str) -> None:
    assert get_icon(name, is_dir) == expected


def test_console_icons() -> None:
    """TC-02: The console variant returns bracketed ASCII tags."""
    assert get_console_icon("src", True) == "[SRC]"
    assert get_console_icon("main.py", False) == "[PY]"
    assert get_console_icon("data.bin", False) == DEFAULT_CONSOLE_FILE_ICON
