from __future__ import annotations

"""
Generator Registry.

Maps format names and their aliases to generator factories. Lookups are
trimmed and case-insensitive. Formats can be registered and removed at
runtime; each registry instance carries its own configuration snapshot.
"""

import logging
from typing import Callable, Dict, List, Optional, Type

from structure4ai.core.generators.base import OutputGenerator
from structure4ai.core.generators.consolidated import ConsolidatedGenerator
from structure4ai.core.generators.html_generator import HtmlGenerator
from structure4ai.core.generators.json_generator import JsonGenerator
from structure4ai.core.generators.tree_text import TreeTextGenerator
from structure4ai.domain.config import AppConfig
from structure4ai.domain.errors import UnsupportedFormatError

logger = logging.getLogger(__name__)

GeneratorFactory = Callable[[AppConfig], OutputGenerator]

DEFAULT_GENERATORS: List[Type[OutputGenerator]] = [
    JsonGenerator,
    TreeTextGenerator,
    HtmlGenerator,
    ConsolidatedGenerator,
]


def _normalize(fmt: str) -> str:
    return (fmt or "").strip().lower()


class GeneratorRegistry:
    """Format name to generator factory lookup."""

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        self._config = config or AppConfig()
        self._factories: Dict[str, GeneratorFactory] = {}

    @classmethod
    def with_defaults(cls, config: Optional[AppConfig] = None) -> "GeneratorRegistry":
        """Create a registry holding every built-in generator and its aliases."""
        registry = cls(config)
        for generator_cls in DEFAULT_GENERATORS:
            for alias in generator_cls.ALIASES:
                registry.register(alias, generator_cls)
        return registry

    def register(self, fmt: str, factory: GeneratorFactory) -> None:
        """
        Map a format name to a factory, replacing any previous mapping.

        Raises:
            ValueError: If the format name is blank.
        """
        key = _normalize(fmt)
        if not key:
            raise ValueError("Format name cannot be empty.")
        self._factories[key] = factory
        logger.debug(f"Registered output format '{key}'")

    def unregister(self, fmt: str) -> bool:
        """Remove a format; returns False if it was not registered."""
        return self._factories.pop(_normalize(fmt), None) is not None

    def is_supported(self, fmt: str) -> bool:
        return _normalize(fmt) in self._factories

    def list_supported_formats(self) -> List[str]:
        return sorted(self._factories)

    def create(self, fmt: str) -> OutputGenerator:
        """
        Instantiate the generator registered for `fmt`.

        Raises:
            UnsupportedFormatError: If no generator is registered under that name.
        """
        factory = self._factories.get(_normalize(fmt))
        if factory is None:
            raise UnsupportedFormatError(fmt, self.list_supported_formats())
        return factory(self._config)
