from __future__ import annotations

"""
Console Progress Observer.

Prints each tree line as the walk discovers it, followed by a status line
that is rewritten in place. Console lines carry bracketed ASCII tags
instead of the pictographs used in the written documents.
"""

import sys
from typing import Optional, TextIO

from structure4ai.core.analysis.icons import get_console_icon, get_icon
from structure4ai.core.analysis.tree_walker import WalkObserver
from structure4ai.domain.tree_models import Entry, WalkCounters
from structure4ai.utils.i18n import i18n


def console_line(entry: Entry, line: str) -> str:
    """
    Swap the pictograph of a rendered tree line for its console tag.

    Error lines are returned unchanged.
    """
    if entry.is_error:
        return line
    suffix = f"{get_icon(entry.name, entry.is_directory)} {entry.name}"
    if not line.endswith(suffix):
        return line
    tag = get_console_icon(entry.name, entry.is_directory)
    return f"{line[:-len(suffix)]}{tag} {entry.name}"


class ConsoleProgressObserver(WalkObserver):
    """Animated console rendering of a walk in progress."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream or sys.stdout
        self._status_width = 0

    def on_walk_started(self, total_expected: int) -> None:
        self._status_width = 0

    def on_entry_visited(self, entry: Entry, line: str, counters: WalkCounters) -> None:
        self._clear_status()
        self._stream.write(console_line(entry, line) + "\n")
        self._write_status(counters)

    def on_walk_finished(self, counters: WalkCounters) -> None:
        self._clear_status()
        self._stream.write(i18n.t(
            "cli.status.summary",
            folders=counters.folders,
            files=counters.files,
            errors=counters.errors,
            processed=counters.processed,
        ) + "\n")
        self._stream.flush()

    def _write_status(self, counters: WalkCounters) -> None:
        status = i18n.t(
            "cli.status.progress",
            folders=counters.folders,
            files=counters.files,
            errors=counters.errors,
            processed=counters.processed,
            total=counters.total_expected,
            percent=counters.progress_percent,
        )
        self._status_width = len(status)
        self._stream.write(status)
        self._stream.flush()

    def _clear_status(self) -> None:
        if self._status_width:
            self._stream.write("\r" + " " * self._status_width + "\r")
            self._status_width = 0
