from __future__ import annotations

"""
Directory Tree Walker.

Enumerates a root directory into a StructureModel: pre-order, directories
before files, case-insensitive name order within each group. Every child is
vetted by the IgnorePolicy before it is visited. Failures below the root are
absorbed into error entries so one unreadable subtree never aborts the walk;
only an invalid root propagates as RootPathError.

Progress reporting is delegated to an injected WalkObserver. Silent and
animated walks run the same code and differ only in the observer and the
optional per-entry delay.
"""

import logging
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from structure4ai.core.analysis.icons import get_icon
from structure4ai.core.analysis.ignore_policy import IgnorePolicy
from structure4ai.core.analysis.tree_renderer import (
    ACCESS_DENIED_LABEL,
    child_prefix,
    error_label,
    render_access_denied_line,
    render_entry_line,
    render_listing_error_line,
    render_node_error_line,
)
from structure4ai.domain.errors import RootPathError
from structure4ai.domain.tree_models import Entry, EntryKind, StructureModel, WalkCounters

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# OBSERVER CONTRACT
# -----------------------------------------------------------------------------

class WalkObserver(ABC):
    """One-way progress notifications emitted during a walk."""

    def on_walk_started(self, total_expected: int) -> None:
        """Called once after the counting pre-pass."""

    @abstractmethod
    def on_entry_visited(self, entry: Entry, line: str, counters: WalkCounters) -> None:
        """Called after each entry is recorded in the model."""

    def on_walk_finished(self, counters: WalkCounters) -> None:
        """Called once when the walk completes."""


class NullObserver(WalkObserver):
    """Observer used for silent walks."""

    def on_entry_visited(self, entry: Entry, line: str, counters: WalkCounters) -> None:
        pass


@dataclass(frozen=True)
class NodeResult:
    """Outcome of visiting one child: the entry to record and whether to descend."""
    entry: Entry
    descend: bool = False

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _sort_key(item: Tuple[str, bool]) -> Tuple[bool, str, str]:
    name, is_dir = item
    return not is_dir, name.casefold(), name


def _join_rel(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


def _describe(exc: OSError) -> str:
    return exc.strerror or exc.__class__.__name__


def _stat_node(path: str) -> os.stat_result:
    """Stat a node; a dangling symlink is described by the link itself."""
    try:
        return os.stat(path)
    except FileNotFoundError:
        if not os.path.islink(path):
            raise
        return os.lstat(path)


def list_children(dir_path: str, root: str, policy: IgnorePolicy) -> List[Tuple[str, bool]]:
    """
    List, sort and filter the immediate children of a directory.

    Args:
        dir_path: Directory to list.
        root: Walk root used for relative ignore checks.
        policy: Active ignore rules.

    Returns:
        List[Tuple[str, bool]]: (name, is_directory) pairs, directories first.

    Raises:
        OSError: If the directory cannot be listed.
    """
    children: List[Tuple[str, bool]] = []
    for name in os.listdir(dir_path):
        full = os.path.join(dir_path, name)
        if policy.must_ignore_path(full, root):
            continue
        children.append((name, os.path.isdir(full)))
    children.sort(key=_sort_key)
    return children


def count_items(root: str, policy: IgnorePolicy, max_depth: int = -1) -> int:
    """
    Count the entries a walk of `root` is expected to produce.

    Used only for progress reporting. An unreadable directory counts as the
    single marker entry the walk will emit for it.
    """
    root = os.path.abspath(root)
    total = 0
    stack: List[Tuple[str, int]] = [(root, 0)]

    while stack:
        dir_path, depth = stack.pop()
        try:
            children = list_children(dir_path, root, policy)
        except OSError:
            total += 1
            continue

        for name, is_dir in children:
            total += 1
            full = os.path.join(dir_path, name)
            if is_dir and _within_depth(depth, max_depth) and not os.path.islink(full):
                stack.append((full, depth + 1))

    return total


def _within_depth(depth: int, max_depth: int) -> bool:
    """True if children of a directory at `depth` may be added."""
    return max_depth < 0 or depth + 1 <= max_depth

# -----------------------------------------------------------------------------
# WALKER
# -----------------------------------------------------------------------------

class TreeWalker:
    """
    Walks one root directory into a StructureModel.

    Args:
        policy: Frozen ignore rules.
        max_depth: Negative for unlimited; otherwise children of a directory
            at depth d are added only if d + 1 <= max_depth.
        compute_sizes: Populate `Entry.size` for files.
        observer: Progress observer; NullObserver when omitted.
        delay_ms: Pause after each entry, for animated console output.
    """

    def __init__(
            self,
            policy: IgnorePolicy,
            *,
            max_depth: int = -1,
            compute_sizes: bool = True,
            observer: Optional[WalkObserver] = None,
            delay_ms: int = 0,
    ) -> None:
        self._policy = policy
        self._max_depth = max_depth
        self._compute_sizes = compute_sizes
        self._observer = observer or NullObserver()
        self._delay_s = max(0, delay_ms) / 1000.0

    def walk(self, root: str) -> StructureModel:
        """
        Traverse `root` and return the populated model.

        Raises:
            RootPathError: If the root is missing, not a directory or unlistable.
        """
        root_abs = os.path.abspath(root)
        if not os.path.exists(root_abs):
            raise RootPathError(root_abs, "path does not exist")
        if not os.path.isdir(root_abs):
            raise RootPathError(root_abs, "not a directory")

        try:
            children = list_children(root_abs, root_abs, self._policy)
        except OSError as e:
            raise RootPathError(root_abs, _describe(e)) from e

        root_name = os.path.basename(root_abs.rstrip("/\\")) or root_abs
        model = StructureModel(root_path=root_abs, root_name=root_name)
        model.total_expected = count_items(root_abs, self._policy, self._max_depth)

        logger.info(f"Walking '{root_abs}' ({model.total_expected} items expected)")
        self._observer.on_walk_started(model.total_expected)

        self._walk_children(model, root_abs, "", 0, "", children)

        self._observer.on_walk_finished(model.counters())
        logger.info(
            f"Walk finished: {model.folder_count} folders, {model.file_count} files, "
            f"{model.error_count} errors"
        )
        return model

    # -------------------------------------------------------------------------
    # Recursion
    # -------------------------------------------------------------------------

    def _walk_directory(
            self,
            model: StructureModel,
            dir_path: str,
            rel_dir: str,
            depth: int,
            prefix: str,
    ) -> None:
        try:
            children = list_children(dir_path, model.root_path, self._policy)
        except PermissionError as e:
            logger.warning(f"Access denied: {dir_path}")
            entry = Entry(
                name=ACCESS_DENIED_LABEL,
                absolute_path=dir_path,
                relative_path=_join_rel(rel_dir, ACCESS_DENIED_LABEL),
                kind=EntryKind.ERROR,
                depth=depth,
                error=str(e),
            )
            self._record(model, entry, render_access_denied_line(prefix))
            return
        except OSError as e:
            logger.warning(f"Cannot list '{dir_path}': {e}")
            label = error_label(_describe(e))
            entry = Entry(
                name=label,
                absolute_path=dir_path,
                relative_path=_join_rel(rel_dir, label),
                kind=EntryKind.ERROR,
                depth=depth,
                error=str(e),
            )
            self._record(model, entry, render_listing_error_line(prefix, _describe(e)))
            return

        self._walk_children(model, dir_path, rel_dir, depth, prefix, children)

    def _walk_children(
            self,
            model: StructureModel,
            dir_path: str,
            rel_dir: str,
            depth: int,
            prefix: str,
            children: List[Tuple[str, bool]],
    ) -> None:
        last_index = len(children) - 1
        for index, (name, is_dir) in enumerate(children):
            is_last = index == last_index
            full = os.path.join(dir_path, name)
            rel = _join_rel(rel_dir, name)

            result = self._visit(name, full, rel, depth, is_dir)
            entry = result.entry
            if entry.is_error:
                line = render_node_error_line(prefix, is_last, name, entry.error or "")
            else:
                line = render_entry_line(prefix, is_last, get_icon(name, entry.is_directory), name)
            self._record(model, entry, line)

            if result.descend:
                self._walk_directory(model, full, rel, depth + 1, child_prefix(prefix, is_last))

    def _visit(self, name: str, full: str, rel: str, depth: int, is_dir: bool) -> NodeResult:
        """Classify and stat one child, turning failures into an error entry."""
        try:
            st = _stat_node(full)
            modified = datetime.fromtimestamp(st.st_mtime)

            if is_dir:
                entry = Entry(
                    name=name,
                    absolute_path=full,
                    relative_path=rel,
                    kind=EntryKind.DIRECTORY,
                    depth=depth,
                    last_modified=modified,
                )
                # Symlinked directories are listed but not followed
                descend = _within_depth(depth, self._max_depth) and not os.path.islink(full)
                return NodeResult(entry, descend)

            entry = Entry(
                name=name,
                absolute_path=full,
                relative_path=rel,
                kind=EntryKind.FILE,
                depth=depth,
                extension=os.path.splitext(name)[1].lower(),
                size=st.st_size if self._compute_sizes else None,
                last_modified=modified,
            )
            return NodeResult(entry)

        except (OSError, ValueError, OverflowError) as e:
            reason = _describe(e) if isinstance(e, OSError) else str(e)
            logger.warning(f"Failed to inspect '{full}': {e}")
            entry = Entry(
                name=name,
                absolute_path=full,
                relative_path=rel,
                kind=EntryKind.ERROR,
                depth=depth,
                error=reason,
            )
            return NodeResult(entry)

    def _record(self, model: StructureModel, entry: Entry, line: str) -> None:
        model.add(entry, line)
        self._observer.on_entry_visited(entry, line, model.counters())
        if self._delay_s:
            time.sleep(self._delay_s)
