from __future__ import annotations

"""
Unit tests for the tree-text (Markdown) generator.
"""

from pathlib import Path

from structure4ai.core.analysis.ignore_policy import IgnorePolicy
from structure4ai.core.analysis.tree_walker import TreeWalker
from structure4ai.core.generators.tree_text import HEADER_RULE, TreeTextGenerator
from structure4ai.domain.config import AppConfig, OutputSettings


def _walk(root: Path):
    return TreeWalker(IgnorePolicy.from_config(AppConfig())).walk(str(root))


def test_header_and_tree_lines(sample_project: Path) -> None:
    """TC-01: Header block followed by the root line and every walk line."""
    model = _walk(sample_project)
    doc = TreeTextGenerator().generate(model, model.root_path)
    lines = doc.content.split("\n")

    assert lines[0] == "Project Structure: project"
    assert lines[1] == f"Path: {model.root_path}"
    assert lines[2].startswith("Generated in: ")
    assert lines[3] == HEADER_RULE
    assert lines[4] == ""
    assert lines[5] == "📂 project"
    assert lines[6:6 + len(model.lines)] == model.lines
    assert doc.content.endswith("\n")


def test_timestamp_can_be_omitted(sample_project: Path) -> None:
    config = AppConfig(output=OutputSettings(include_timestamp=False))
    model = _walk(sample_project)
    doc = TreeTextGenerator(config).generate(model, model.root_path)

    assert "Generated in:" not in doc.content
    assert doc.content.split("\n")[2] == HEADER_RULE


def test_document_metadata() -> None:
    generator = TreeTextGenerator()

    assert generator.file_extension() == "md"
    assert generator.format_name() == "Markdown"
    assert generator.supports_format(" MD ")
    assert generator.supports_format("tree")
    assert not generator.supports_format("json")


def test_empty_tree_renders_root_only(tmp_path: Path) -> None:
    model = _walk(tmp_path)
    doc = TreeTextGenerator().generate(model, model.root_path)

    assert doc.content.rstrip("\n").split("\n")[-1] == f"📂 {model.root_name}"
