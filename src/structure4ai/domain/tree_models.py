from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the typed entry record produced for every visited filesystem node
and the StructureModel aggregate that accumulates entries, visual lines and
counters during a single walk.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class EntryKind(str, Enum):
    """Discriminator for the three kinds of walk entries."""
    DIRECTORY = "directory"
    FILE = "file"
    ERROR = "error"


@dataclass(frozen=True)
class Entry:
    """
    One node visited during a walk.

    Attributes:
        name: Base name of the node (or a synthetic marker for errors).
        absolute_path: Absolute filesystem path.
        relative_path: Forward-slash path relative to the walk root.
        kind: Directory, file or error marker.
        depth: Nesting level, 0 for the root's direct children.
        extension: Lower-cased extension, files only.
        size: File size in bytes when size computation is enabled.
        last_modified: Modification time when available.
        error: Failure description, error entries only.
    """
    name: str
    absolute_path: str
    relative_path: str
    kind: EntryKind
    depth: int
    extension: str = ""
    size: Optional[int] = None
    last_modified: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_error(self) -> bool:
        return self.kind is EntryKind.ERROR


@dataclass(frozen=True)
class WalkCounters:
    """Point-in-time snapshot of the running walk counters."""
    folders: int
    files: int
    errors: int
    processed: int
    total_expected: int

    @property
    def progress_percent(self) -> int:
        if self.total_expected <= 0:
            return 0
        return min(100, (self.processed * 100) // self.total_expected)


@dataclass
class StructureModel:
    """
    Aggregate result of one walk.

    Entries are kept in pre-order (directories first, case-insensitive name
    order) together with one rendered visual line per entry. Counters are
    maintained by `add` only, so `processed_count == len(entries)` holds
    at every point of the walk.
    """
    root_path: str
    root_name: str
    entries: List[Entry] = field(default_factory=list)
    lines: List[str] = field(default_factory=list)
    folder_count: int = 0
    file_count: int = 0
    error_count: int = 0
    processed_count: int = 0
    total_expected: int = 0

    def add(self, entry: Entry, line: str) -> None:
        """Append an entry and its visual line, updating the counters."""
        if entry.kind is EntryKind.DIRECTORY:
            self.folder_count += 1
        elif entry.kind is EntryKind.FILE:
            self.file_count += 1
        else:
            self.error_count += 1

        self.processed_count += 1
        self.entries.append(entry)
        self.lines.append(line)

    def counters(self) -> WalkCounters:
        return WalkCounters(
            folders=self.folder_count,
            files=self.file_count,
            errors=self.error_count,
            processed=self.processed_count,
            total_expected=self.total_expected,
        )

    @property
    def files(self) -> List[Entry]:
        return [e for e in self.entries if e.kind is EntryKind.FILE]

    @property
    def directories(self) -> List[Entry]:
        return [e for e in self.entries if e.kind is EntryKind.DIRECTORY]
