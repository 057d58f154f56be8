from __future__ import annotations

"""
Unit tests for the Generator Registry.

Verifies alias resolution, runtime registration and the error raised for
unknown formats.
"""

import pytest

from structure4ai.core.generators.base import OutputGenerator
from structure4ai.core.generators.consolidated import ConsolidatedGenerator
from structure4ai.core.generators.html_generator import HtmlGenerator
from structure4ai.core.generators.json_generator import JsonGenerator
from structure4ai.core.generators.registry import GeneratorRegistry
from structure4ai.core.generators.tree_text import TreeTextGenerator
from structure4ai.domain.config import AppConfig, OutputSettings
from structure4ai.domain.errors import UnsupportedFormatError
from structure4ai.domain.output_models import OutputDocument
from structure4ai.domain.tree_models import StructureModel


class PlainGenerator(OutputGenerator):
    FORMAT_NAME = "Plain"
    EXTENSION = "txt"
    ALIASES = ("plain",)

    def generate(self, model, root_path):
        return self._document("\n".join(model.lines))


@pytest.fixture
def registry() -> GeneratorRegistry:
    return GeneratorRegistry.with_defaults()


def test_default_formats(registry: GeneratorRegistry) -> None:
    """TC-01: Every built-in alias is registered, listed in sorted order."""
    assert registry.list_supported_formats() == [
        "all-in-one", "consolidated", "htm", "html", "json", "markdown", "md", "single", "tree",
    ]


@pytest.mark.parametrize(
    "fmt, expected",
    [
        ("json", JsonGenerator),
        (" JSON ", JsonGenerator),
        ("md", TreeTextGenerator),
        ("Markdown", TreeTextGenerator),
        ("htm", HtmlGenerator),
        ("all-in-one", ConsolidatedGenerator),
    ],
)
def test_create_resolves_aliases(registry: GeneratorRegistry, fmt: str, expected: type) -> None:
    assert isinstance(registry.create(fmt), expected)


def test_unknown_format_lists_supported(registry: GeneratorRegistry) -> None:
    """TC-02: 'yaml' fails with an error naming the supported formats."""
    with pytest.raises(UnsupportedFormatError) as exc:
        registry.create("yaml")

    message = str(exc.value)
    assert "yaml" in message
    for name in ("json", "markdown", "html"):
        assert name in message
    assert exc.value.format == "yaml"
    assert "json" in exc.value.supported


def test_register_and_unregister(registry: GeneratorRegistry) -> None:
    registry.register("Plain", PlainGenerator)
    assert registry.is_supported("PLAIN")
    assert isinstance(registry.create("plain"), PlainGenerator)

    assert registry.unregister("plain") is True
    assert registry.unregister("plain") is False
    assert not registry.is_supported("plain")


def test_register_rejects_blank_name(registry: GeneratorRegistry) -> None:
    with pytest.raises(ValueError):
        registry.register("  ", PlainGenerator)


def test_created_generators_share_registry_config() -> None:
    config = AppConfig(output=OutputSettings(include_timestamp=False))
    generator = GeneratorRegistry.with_defaults(config).create("json")
    assert generator.config is config


def test_custom_generator_output() -> None:
    registry = GeneratorRegistry()
    registry.register("plain", PlainGenerator)

    model = StructureModel(root_path="/r", root_name="r", lines=["└── 📄 a.txt"])

    doc = registry.create("plain").generate(model, "/r")
    assert doc == OutputDocument(content="└── 📄 a.txt", extension="txt", format_name="Plain")
