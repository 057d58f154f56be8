from __future__ import annotations

"""
Ignore Policy.

Decides whether a name or a path below the walk root is excluded from
traversal. Rules are inclusive by default: everything is visited unless a
folder name, file name, extension, custom glob or the hidden-file rule
matches. Rules are compiled once at construction and never change afterwards.
"""

import fnmatch
import logging
import os
import re
from typing import Iterable, List, Optional, Tuple

from structure4ai.domain.config import AppConfig
from structure4ai.domain.constants import ALLOWED_DOTFILES

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOB COMPILATION
# -----------------------------------------------------------------------------

def glob_to_regex(pattern: str) -> str:
    """
    Translate a gitignore-style glob into an anchored regex source string.

    Supported syntax: `**/` (zero or more leading directories), `/**` (the
    path itself and everything below it), `**` (anything), `*` (anything
    within a segment), `?` (one character within a segment) and `[...]`
    classes. A pattern without a slash matches at any depth; a leading
    slash anchors it to the root.

    Args:
        pattern: Raw glob pattern.

    Returns:
        str: Regex source suitable for `re.fullmatch`.

    Raises:
        ValueError: If the pattern is empty or contains an unterminated class.
    """
    glob = pattern.strip().replace("\\", "/")
    if glob.endswith("/") and len(glob) > 1:
        glob = glob.rstrip("/")
    if not glob:
        raise ValueError("empty pattern")

    anchored = glob.startswith("/")
    glob = glob.lstrip("/")

    parts: List[str] = []
    i, n = 0, len(glob)
    while i < n:
        c = glob[i]
        if glob.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif glob.startswith("/**", i) and i + 3 == n:
            parts.append("(?:/.*)?")
            i += 3
        elif glob.startswith("**", i):
            parts.append(".*")
            i += 2
        elif c == "*":
            parts.append("[^/]*")
            i += 1
        elif c == "?":
            parts.append("[^/]")
            i += 1
        elif c == "[":
            end = glob.find("]", i + 2 if glob[i + 1:i + 2] in ("!", "]") else i + 1)
            if end == -1:
                raise ValueError(f"unterminated character class in '{pattern}'")
            body = glob[i + 1:end]
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body.replace(chr(92), chr(92) * 2)}]")
            i = end + 1
        else:
            parts.append(re.escape(c))
            i += 1

    regex = "".join(parts)
    if not anchored and "/" not in glob:
        regex = "(?:.*/)?" + regex
    return regex


def compile_globs(patterns: Iterable[str]) -> List[re.Pattern]:
    """
    Compile glob patterns, discarding the ones that cannot be translated.

    Args:
        patterns: Raw glob strings.

    Returns:
        List[re.Pattern]: Case-insensitive compiled patterns.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(glob_to_regex(p), re.IGNORECASE))
        except (ValueError, re.error) as e:
            logger.debug(f"Skipping invalid ignore pattern '{p}': {e}")
    return compiled

# -----------------------------------------------------------------------------
# POLICY
# -----------------------------------------------------------------------------

class IgnorePolicy:
    """
    Immutable snapshot of the exclusion rules used by one walk.

    Name comparisons are case-insensitive. Folder names apply per path
    segment, so an ignored `bin` excludes `bin` at any depth but not
    `binary`.
    """

    def __init__(
            self,
            ignore_folders: Iterable[str] = (),
            ignore_files: Iterable[str] = (),
            ignore_extensions: Iterable[str] = (),
            custom_patterns: Iterable[str] = (),
            include_hidden: bool = False,
    ) -> None:
        self._folders = frozenset(f.strip().casefold() for f in ignore_folders if f and f.strip())

        exact: List[str] = []
        wildcards: List[str] = []
        for f in ignore_files:
            name = (f or "").strip().casefold()
            if not name:
                continue
            if any(ch in name for ch in "*?["):
                wildcards.append(name)
            else:
                exact.append(name)
        self._files = frozenset(exact)
        self._file_wildcards: Tuple[str, ...] = tuple(wildcards)

        exts = []
        for e in ignore_extensions:
            ext = (e or "").strip().casefold()
            if not ext:
                continue
            exts.append(ext if ext.startswith(".") else f".{ext}")
        self._extensions: Tuple[str, ...] = tuple(exts)

        self._globs: Tuple[re.Pattern, ...] = tuple(compile_globs(custom_patterns))
        self._include_hidden = bool(include_hidden)

    @classmethod
    def from_config(cls, config: AppConfig) -> "IgnorePolicy":
        """Build a policy from the filter and hidden-file settings."""
        return cls(
            ignore_folders=config.filters.ignore_folders,
            ignore_files=config.filters.ignore_files,
            ignore_extensions=config.filters.ignore_extensions,
            custom_patterns=config.filters.custom_ignore_patterns,
            include_hidden=config.general.include_hidden_files,
        )

    @property
    def include_hidden(self) -> bool:
        return self._include_hidden

    @property
    def pattern_count(self) -> int:
        """Number of custom globs that compiled successfully."""
        return len(self._globs)

    # -------------------------------------------------------------------------
    # Name rules
    # -------------------------------------------------------------------------

    def is_hidden_excluded(self, name: str) -> bool:
        if self._include_hidden or not name.startswith("."):
            return False
        return name not in ALLOWED_DOTFILES

    def is_ignored_folder(self, name: str) -> bool:
        return name.casefold() in self._folders

    def must_ignore(self, name: str) -> bool:
        """
        Evaluate every name rule against a bare base name.

        Args:
            name: File or directory base name.

        Returns:
            bool: True if the name is excluded.
        """
        if not name:
            return False
        if self.is_hidden_excluded(name):
            return True

        folded = name.casefold()
        if folded in self._folders or folded in self._files:
            return True
        if any(fnmatch.fnmatchcase(folded, w) for w in self._file_wildcards):
            return True
        if any(folded.endswith(ext) for ext in self._extensions):
            return True
        return any(rx.fullmatch(name) for rx in self._globs)

    # -------------------------------------------------------------------------
    # Path rules
    # -------------------------------------------------------------------------

    def must_ignore_path(self, path: str, root: str) -> bool:
        """
        Evaluate the rules against a path relative to the walk root.

        Ancestor segments are checked against the folder list and the hidden
        rule, the last segment against every name rule and the whole relative
        path against the custom globs.

        Args:
            path: Absolute or root-relative path of the candidate.
            root: Walk root; never ignored itself.

        Returns:
            bool: True if the path is excluded.
        """
        rel = self.relative_path(path, root)
        if rel is None:
            return self.must_ignore(os.path.basename(path))
        if not rel:
            return False

        segments = rel.split("/")
        for segment in segments[:-1]:
            if self.is_hidden_excluded(segment) or self.is_ignored_folder(segment):
                return True

        if self.must_ignore(segments[-1]):
            return True
        return any(rx.fullmatch(rel) for rx in self._globs)

    @staticmethod
    def relative_path(path: str, root: str) -> Optional[str]:
        """
        Compute the forward-slash path of `path` relative to `root`.

        Returns:
            Optional[str]: "" for the root itself, None when the path cannot
            be expressed relative to the root (different drive).
        """
        try:
            rel = os.path.relpath(os.path.join(root, path), root)
        except ValueError:
            return None
        rel = rel.replace(os.sep, "/")
        return "" if rel == "." else rel
