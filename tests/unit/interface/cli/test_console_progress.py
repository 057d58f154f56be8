from __future__ import annotations

"""
Unit tests for the animated console observer.
"""

import io

from structure4ai.domain.tree_models import Entry, EntryKind, WalkCounters
from structure4ai.interface.cli.progress import ConsoleProgressObserver, console_line


def _entry(name: str) -> Entry:
    return Entry(name=name, absolute_path=f"/r/{name}", relative_path=name, kind=EntryKind.FILE, depth=0)


def test_lines_and_status_are_written():
    """TC-01: Each entry line is printed, then a rewritable status line."""
    stream = io.StringIO()
    observer = ConsoleProgressObserver(stream)

    observer.on_walk_started(2)
    observer.on_entry_visited(_entry("a.txt"), "├── 📄 a.txt", WalkCounters(0, 1, 0, 1, 2))
    observer.on_entry_visited(_entry("b.txt"), "└── 📄 b.txt", WalkCounters(0, 2, 0, 2, 2))
    observer.on_walk_finished(WalkCounters(0, 2, 0, 2, 2))

    output = stream.getvalue()
    assert "├── [TXT] a.txt\n" in output
    assert "└── [TXT] b.txt\n" in output
    assert "Processed: 1/2 (50%)" in output
    assert "\r" in output
    assert output.endswith("0 folders, 2 files, 0 errors (2 items)\n")


def test_finish_without_entries():
    stream = io.StringIO()
    observer = ConsoleProgressObserver(stream)

    observer.on_walk_started(0)
    observer.on_walk_finished(WalkCounters(0, 0, 0, 0, 0))

    assert stream.getvalue() == "0 folders, 0 files, 0 errors (0 items)\n"


def test_console_line_uses_ascii_tags():
    """TC-02: Pictographs are replaced by console tags; prefixes are preserved."""
    folder = Entry(name="src", absolute_path="/r/src", relative_path="src", kind=EntryKind.DIRECTORY, depth=0)
    script = Entry(name="main.py", absolute_path="/r/src/main.py", relative_path="src/main.py",
                   kind=EntryKind.FILE, depth=1, extension=".py")

    assert console_line(folder, "├── 📁 src") == "├── [DIR] src"
    assert console_line(script, "│   └── 🐍 main.py") == "│   └── [PY] main.py"


def test_console_line_keeps_error_lines():
    broken = Entry(name="x", absolute_path="/r/x", relative_path="x", kind=EntryKind.ERROR, depth=0, error="boom")
    assert console_line(broken, "└── ❌ x [Error: boom]") == "└── ❌ x [Error: boom]"
