from __future__ import annotations

"""
Tree-Text (Markdown) Generator.

Renders the visual lines accumulated during the walk under a short header.
The lines already carry connectors and icons, so this format is a direct
concatenation.
"""

from typing import List

from structure4ai.core.analysis.tree_renderer import render_tree_lines
from structure4ai.core.generators.base import OutputGenerator
from structure4ai.domain.output_models import OutputDocument
from structure4ai.domain.tree_models import StructureModel

HEADER_RULE = "=" * 60


class TreeTextGenerator(OutputGenerator):
    FORMAT_NAME = "Markdown"
    EXTENSION = "md"
    ALIASES = ("markdown", "md", "tree")

    def generate(self, model: StructureModel, root_path: str) -> OutputDocument:
        lines: List[str] = [
            f"Project Structure: {model.root_name}",
            f"Path: {root_path}",
        ]
        if self.config.output.include_timestamp:
            lines.append(f"Generated in: {self._timestamp()}")
        lines.extend([HEADER_RULE, ""])
        lines.extend(render_tree_lines(model.root_name, model.lines))

        return self._document("\n".join(lines) + "\n")
