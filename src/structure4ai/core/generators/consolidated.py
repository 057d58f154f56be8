from __future__ import annotations

"""
Consolidated Source Generator.

Produces one Markdown document containing every source-like file of the
project, meant to be handed to an AI assistant as full context. It runs its
own traversal of the root (independent of the model entries) and only uses
the model for the statistics block.

A file that cannot be read is recorded inline and generation continues.
"""

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from itertools import groupby
from typing import FrozenSet, List, Optional

from structure4ai.core.analysis.ignore_policy import IgnorePolicy
from structure4ai.core.analysis.project_detector import detect_project_type
from structure4ai.core.generators.base import TIMESTAMP_FORMAT, OutputGenerator
from structure4ai.core.pipeline.reader import read_text_file
from structure4ai.core.processing.sanitizer import clean_control_characters
from structure4ai.core.processing.tokenizer import count_tokens
from structure4ai.domain.constants import (
    CONSOLIDATED_IGNORED_FOLDERS,
    LANGUAGE_CODES,
    LANGUAGE_NAMES,
    MAX_CONSOLIDATED_FILE_BYTES,
    SOURCE_EXTENSIONS,
)
from structure4ai.domain.output_models import OutputDocument
from structure4ai.domain.tree_models import StructureModel

logger = logging.getLogger(__name__)

SECTION_RULE = "=" * 80
FILE_RULE = "-" * 80

_BACKTICK_RUN = re.compile(r"`+")


@dataclass(frozen=True)
class SourceFile:
    absolute_path: str
    relative_path: str
    extension: str
    size: int
    last_modified: datetime


def language_name(ext: str) -> str:
    return LANGUAGE_NAMES.get(ext, ext.upper().lstrip("."))


def language_code(ext: str) -> str:
    return LANGUAGE_CODES.get(ext, "text")


def code_fence(content: str) -> str:
    """Return a backtick fence longer than any backtick run in `content`."""
    longest = max((len(m.group(0)) for m in _BACKTICK_RUN.finditer(content)), default=0)
    return "`" * max(3, longest + 1)


def _size_kb(size: int) -> str:
    return f"{size / 1024:.1f} KB"


class ConsolidatedGenerator(OutputGenerator):
    FORMAT_NAME = "Consolidated Code"
    EXTENSION = "consolidated.md"
    ALIASES = ("consolidated", "single", "all-in-one")

    # -------------------------------------------------------------------------
    # File collection
    # -------------------------------------------------------------------------

    def _ignored_folders(self) -> FrozenSet[str]:
        configured = {f.lower() for f in self.config.filters.ignore_folders}
        return CONSOLIDATED_IGNORED_FOLDERS | configured

    def collect_source_files(self, root_path: str) -> List[SourceFile]:
        """
        Gather source-like files under the root, sorted by relative path.

        Directories in the ignored-folder set are pruned at any depth, names
        rejected by the ignore policy are skipped, and files above the size
        ceiling are left out, as are the files this run writes.
        """
        root = os.path.abspath(root_path)
        policy = IgnorePolicy.from_config(self.config)
        ignored = self._ignored_folders()
        collected: List[SourceFile] = []

        for current, dirs, names in os.walk(root):
            dirs[:] = [d for d in dirs if d.lower() not in ignored and not policy.must_ignore(d)]

            for name in names:
                ext = os.path.splitext(name)[1].lower()
                if ext not in SOURCE_EXTENSIONS or policy.must_ignore(name):
                    continue

                full = os.path.join(current, name)
                if self.is_output_target(full):
                    continue
                try:
                    st = os.stat(full)
                except OSError as e:
                    logger.warning(f"Skipping unreadable file '{full}': {e}")
                    continue
                if st.st_size > MAX_CONSOLIDATED_FILE_BYTES:
                    logger.debug(f"Skipping large file '{full}' ({st.st_size} bytes)")
                    continue

                rel = os.path.relpath(full, root).replace(os.sep, "/")
                collected.append(SourceFile(
                    absolute_path=full,
                    relative_path=rel,
                    extension=ext,
                    size=st.st_size,
                    last_modified=datetime.fromtimestamp(st.st_mtime),
                ))

        collected.sort(key=lambda f: f.relative_path)
        return collected

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def generate(self, model: StructureModel, root_path: str) -> OutputDocument:
        files = self.collect_source_files(root_path)
        logger.info(f"Consolidating {len(files)} source files")

        index = self._render_index(files)
        contents = self._render_contents(files)

        tokens = None
        if self.config.statistics.estimate_tokens:
            tokens = count_tokens(contents)

        parts = [
            self._render_header(model, root_path, tokens),
            index,
            "",
            SECTION_RULE,
            "# PROJECT FILES",
            SECTION_RULE,
            "",
            contents,
        ]
        return self._document("\n".join(parts))

    def _render_header(self, model: StructureModel, root_path: str, tokens: Optional[int]) -> str:
        info = detect_project_type(root_path, IgnorePolicy.from_config(self.config))

        lines = [
            "# CONSOLIDATED PROJECT FOR AI ANALYSIS",
            "",
            "This document contains every source file of the project in a single file,",
            "ready to be uploaded to and analyzed by AI assistants.",
            "",
            "## PROJECT INFORMATION",
            "",
            f"- **Name:** {model.root_name}",
            f"- **Path:** {root_path}",
            f"- **Type:** {info.type}",
            f"- **Language:** {info.language}",
        ]
        if info.framework and info.framework != info.language:
            lines.append(f"- **Framework:** {info.framework}")
        lines.append(f"- **Description:** {info.description}")
        if self.config.output.include_timestamp:
            lines.append(f"- **Generated:** {self._timestamp()}")

        lines.extend([
            "",
            "## STATISTICS",
            "",
            f"- **Total Folders:** {model.folder_count}",
            f"- **Total Files:** {model.file_count}",
            f"- **Processed Items:** {model.processed_count}",
        ])
        if tokens is not None:
            lines.append(f"- **Estimated Tokens:** {tokens}")
        lines.append("")
        return "\n".join(lines)

    def _render_index(self, files: List[SourceFile]) -> str:
        lines = [
            "## FILE INDEX",
            "",
            "The following files are included in this document:",
            "",
        ]
        by_ext = sorted(files, key=lambda f: (f.extension, f.relative_path))
        for ext, group in groupby(by_ext, key=lambda f: f.extension):
            lines.append(f"### {language_name(ext)} ({ext})")
            lines.append("")
            for f in group:
                lines.append(f"- `{f.relative_path}` ({_size_kb(f.size)})")
            lines.append("")

        lines.append(f"**Total:** {len(files)} source files")
        return "\n".join(lines)

    def _render_contents(self, files: List[SourceFile]) -> str:
        blocks: List[str] = []
        for f in files:
            try:
                text = read_text_file(f.absolute_path)
            except OSError as e:
                logger.warning(f"Failed to read '{f.absolute_path}': {e}")
                blocks.append(
                    f"**ERROR reading file {os.path.basename(f.relative_path)}:** {e}\n\n{FILE_RULE}\n"
                )
                continue

            cleaned = clean_control_characters(text)
            fence = code_fence(cleaned)
            body = cleaned if cleaned.endswith("\n") or not cleaned else cleaned + "\n"
            blocks.append(
                f"## {f.relative_path}\n"
                "\n"
                f"**Type:** {language_name(f.extension)}  \n"
                f"**Size:** {_size_kb(f.size)}  \n"
                f"**Last Modified:** {f.last_modified.strftime(TIMESTAMP_FORMAT)}\n"
                "\n"
                f"{fence}{language_code(f.extension)}\n"
                f"{body}"
                f"{fence}\n"
                "\n"
                f"{FILE_RULE}\n"
            )
        return "\n".join(blocks)
