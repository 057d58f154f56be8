from __future__ import annotations

"""
Unit tests for the Directory Tree Walker.

Verifies:
1. Pre-order traversal with directories first and case-insensitive order.
2. Counter bookkeeping and the expected-item pre-pass.
3. Error absorption for unreadable directories and nodes.
4. Depth limiting and observer notifications.
"""

import errno
import os
from pathlib import Path
from typing import List, Tuple

import pytest

from structure4ai.core.analysis.ignore_policy import IgnorePolicy
from structure4ai.core.analysis.tree_walker import (
    TreeWalker,
    WalkObserver,
    count_items,
    list_children,
)
from structure4ai.domain.config import AppConfig
from structure4ai.domain.errors import RootPathError
from structure4ai.domain.tree_models import Entry, EntryKind, WalkCounters


class RecordingObserver(WalkObserver):
    def __init__(self) -> None:
        self.started: List[int] = []
        self.visited: List[Tuple[Entry, str, WalkCounters]] = []
        self.finished: List[WalkCounters] = []

    def on_walk_started(self, total_expected: int) -> None:
        self.started.append(total_expected)

    def on_entry_visited(self, entry: Entry, line: str, counters: WalkCounters) -> None:
        self.visited.append((entry, line, counters))

    def on_walk_finished(self, counters: WalkCounters) -> None:
        self.finished.append(counters)


@pytest.fixture
def default_policy() -> IgnorePolicy:
    return IgnorePolicy.from_config(AppConfig())


def _rel_paths(model) -> List[str]:
    return [e.relative_path for e in model.entries]


# -----------------------------------------------------------------------------
# Ordering and filtering
# -----------------------------------------------------------------------------

def test_walk_sample_project_order(sample_project: Path, default_policy: IgnorePolicy) -> None:
    """TC-01: Directories precede files and ignored/hidden folders are skipped."""
    model = TreeWalker(default_policy).walk(str(sample_project))

    assert _rel_paths(model) == [
        "docs",
        "docs/guide.md",
        "src",
        "src/utils",
        "src/utils/helpers.py",
        "src/main.py",
        "README.md",
        "setup.py",
    ]
    assert model.folder_count == 3
    assert model.file_count == 5
    assert model.error_count == 0
    assert model.root_name == "project"
    assert model.root_path == os.path.abspath(str(sample_project))


def test_ignored_folders_and_hidden_content(tmp_path: Path, default_policy: IgnorePolicy) -> None:
    """TC-02: src/main.cs survives while bin/ and .git/ are excluded."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.cs").write_bytes(b"x" * 50)
    (tmp_path / "bin").mkdir()
    (tmp_path / "bin" / "out.dll").write_bytes(b"\x00")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("ref", encoding="utf-8")

    model = TreeWalker(default_policy).walk(str(tmp_path))

    assert _rel_paths(model) == ["src", "src/main.cs"]
    assert model.folder_count == 1
    assert model.file_count == 1

    main_cs = model.entries[1]
    assert main_cs.depth == 1
    assert main_cs.size == 50
    assert main_cs.extension == ".cs"


def test_case_insensitive_sibling_order(tmp_path: Path) -> None:
    for d in ("b_dir", "A_dir"):
        (tmp_path / d).mkdir()
    (tmp_path / "A_dir" / "x.txt").write_text("x", encoding="utf-8")
    for f in ("c.txt", "B.txt", "a.txt"):
        (tmp_path / f).write_text(f, encoding="utf-8")

    model = TreeWalker(IgnorePolicy()).walk(str(tmp_path))

    assert _rel_paths(model) == ["A_dir", "A_dir/x.txt", "b_dir", "a.txt", "B.txt", "c.txt"]


def test_list_children_sorts_and_filters(tmp_path: Path) -> None:
    (tmp_path / "zeta").mkdir()
    (tmp_path / "Alpha.txt").write_text("", encoding="utf-8")
    (tmp_path / "skip.log").write_text("", encoding="utf-8")

    children = list_children(str(tmp_path), str(tmp_path), IgnorePolicy(ignore_files=["*.log"]))

    assert children == [("zeta", True), ("Alpha.txt", False)]


# -----------------------------------------------------------------------------
# Structural invariants
# -----------------------------------------------------------------------------

def test_counters_and_depth_invariants(sample_project: Path, default_policy: IgnorePolicy) -> None:
    """TC-03: processed == folders + files + errors and depth follows the path."""
    model = TreeWalker(default_policy).walk(str(sample_project))

    assert model.processed_count == model.folder_count + model.file_count + model.error_count
    assert model.processed_count == len(model.entries) == len(model.lines)
    for entry in model.entries:
        assert entry.depth == entry.relative_path.count("/")


def test_descendants_are_contiguous(sample_project: Path, default_policy: IgnorePolicy) -> None:
    """TC-04: Pre-order: every directory's descendants directly follow it."""
    model = TreeWalker(default_policy).walk(str(sample_project))
    paths = _rel_paths(model)

    for index, entry in enumerate(model.entries):
        if not entry.is_directory:
            continue
        prefix = entry.relative_path + "/"
        positions = [i for i, p in enumerate(paths) if p.startswith(prefix)]
        if positions:
            assert positions == list(range(index + 1, index + 1 + len(positions)))


def test_total_expected_matches_walk(sample_project: Path, default_policy: IgnorePolicy) -> None:
    model = TreeWalker(default_policy).walk(str(sample_project))
    assert model.total_expected == model.processed_count
    assert count_items(str(sample_project), default_policy) == 8


def test_rendered_lines(tmp_path: Path) -> None:
    """TC-05: Lines carry connectors, continuation prefixes and icons."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("", encoding="utf-8")
    (tmp_path / "README.md").write_text("", encoding="utf-8")

    model = TreeWalker(IgnorePolicy()).walk(str(tmp_path))

    assert model.lines == [
        "├── 📂 src",
        "│   └── 🐍 main.py",
        "└── 📖 README.md",
    ]


def test_sizes_can_be_disabled(sample_project: Path, default_policy: IgnorePolicy) -> None:
    model = TreeWalker(default_policy, compute_sizes=False).walk(str(sample_project))
    assert all(f.size is None for f in model.files)


# -----------------------------------------------------------------------------
# Depth limit
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "max_depth, expected",
    [
        (0, ["a"]),
        (1, ["a", "a/b"]),
        (-1, ["a", "a/b", "a/b/c.txt"]),
    ],
)
def test_max_depth(tmp_path: Path, max_depth: int, expected: List[str]) -> None:
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "a" / "b" / "c.txt").write_text("c", encoding="utf-8")

    model = TreeWalker(IgnorePolicy(), max_depth=max_depth).walk(str(tmp_path))

    assert _rel_paths(model) == expected
    assert model.total_expected == len(expected)


# -----------------------------------------------------------------------------
# Error handling
# -----------------------------------------------------------------------------

def test_access_denied_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """TC-06: An unreadable directory yields one marker and the walk continues."""
    (tmp_path / "locked").mkdir()
    (tmp_path / "visible").mkdir()
    (tmp_path / "visible" / "a.txt").write_text("a", encoding="utf-8")

    real_listdir = os.listdir

    def fake_listdir(path):
        if os.path.basename(str(path)) == "locked":
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return real_listdir(path)

    monkeypatch.setattr(os, "listdir", fake_listdir)

    model = TreeWalker(IgnorePolicy()).walk(str(tmp_path))

    assert _rel_paths(model) == ["locked", "locked/[Access Denied]", "visible", "visible/a.txt"]
    assert model.error_count == 1
    assert model.folder_count == 2
    assert model.file_count == 1

    marker = model.entries[1]
    assert marker.kind is EntryKind.ERROR
    assert marker.depth == 1
    assert model.lines[1] == "│   └── 🔒 [Access Denied]"


def test_listing_error_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "broken").mkdir()
    real_listdir = os.listdir

    def fake_listdir(path):
        if os.path.basename(str(path)) == "broken":
            raise OSError(errno.EIO, "Input/output error")
        return real_listdir(path)

    monkeypatch.setattr(os, "listdir", fake_listdir)

    model = TreeWalker(IgnorePolicy()).walk(str(tmp_path))

    assert _rel_paths(model) == ["broken", "broken/[Error: Input/output error]"]
    assert model.lines[1] == "    └── ❌ [Error: Input/output error]"
    assert model.error_count == 1


def test_node_stat_failure_becomes_error_entry(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """TC-07: A node that cannot be inspected keeps its name and sibling position."""
    (tmp_path / "bad.txt").write_text("x", encoding="utf-8")
    (tmp_path / "good.txt").write_text("y", encoding="utf-8")
    real_stat = os.stat

    def fake_stat(path, *args, **kwargs):
        if os.path.basename(str(path)) == "bad.txt":
            raise PermissionError(errno.EACCES, "Permission denied")
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", fake_stat)

    model = TreeWalker(IgnorePolicy()).walk(str(tmp_path))

    bad = model.entries[0]
    assert bad.kind is EntryKind.ERROR
    assert bad.name == "bad.txt"
    assert bad.error == "Permission denied"
    assert model.lines[0] == "├── ❌ bad.txt [Error: Permission denied]"
    assert model.entries[1].name == "good.txt"
    assert model.file_count == 1
    assert model.error_count == 1


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(RootPathError) as exc:
        TreeWalker(IgnorePolicy()).walk(str(tmp_path / "nope"))
    assert "does not exist" in str(exc.value)


def test_file_root_raises(tmp_path: Path) -> None:
    target = tmp_path / "file.txt"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(RootPathError) as exc:
        TreeWalker(IgnorePolicy()).walk(str(target))
    assert "not a directory" in str(exc.value)


# -----------------------------------------------------------------------------
# Observer
# -----------------------------------------------------------------------------

def test_observer_receives_every_entry(sample_project: Path, default_policy: IgnorePolicy) -> None:
    """TC-08: Notifications mirror the model, with monotonically growing counters."""
    observer = RecordingObserver()
    model = TreeWalker(default_policy, observer=observer).walk(str(sample_project))

    assert observer.started == [model.total_expected]
    assert [v[0] for v in observer.visited] == model.entries
    assert [v[1] for v in observer.visited] == model.lines
    assert [v[2].processed for v in observer.visited] == list(range(1, len(model.entries) + 1))
    assert observer.finished == [model.counters()]


def test_silent_and_observed_walks_match(sample_project: Path, default_policy: IgnorePolicy) -> None:
    silent = TreeWalker(default_policy).walk(str(sample_project))
    observed = TreeWalker(default_policy, observer=RecordingObserver()).walk(str(sample_project))

    assert silent.entries == observed.entries
    assert silent.lines == observed.lines


def test_dangling_symlink_is_listed_as_file(tmp_path: Path) -> None:
    """TC-09: A symlink whose target is gone is a file entry, not an error."""
    (tmp_path / "real.txt").write_text("x", encoding="utf-8")
    try:
        os.symlink(str(tmp_path / "gone.txt"), str(tmp_path / "dangling.txt"))
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    model = TreeWalker(IgnorePolicy()).walk(str(tmp_path))

    assert [(e.name, e.kind) for e in model.entries] == [
        ("dangling.txt", EntryKind.FILE),
        ("real.txt", EntryKind.FILE),
    ]
    assert model.error_count == 0
    assert model.lines[0] == "├── 📄 dangling.txt"
