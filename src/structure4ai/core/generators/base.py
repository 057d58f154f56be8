from __future__ import annotations

"""
Output Generator Contract.

Every output format implements OutputGenerator. A generator receives the
configuration snapshot at construction, only reads the completed
StructureModel and returns an OutputDocument; it never writes to disk.
"""

import os
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Tuple

from structure4ai.domain.config import AppConfig
from structure4ai.domain.output_models import OutputDocument
from structure4ai.domain.tree_models import StructureModel

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class OutputGenerator(ABC):
    """
    Base class for format renderers.

    Subclasses declare their display name, file extension and the aliases
    accepted by `supports_format`.
    """

    FORMAT_NAME: str = ""
    EXTENSION: str = ""
    ALIASES: Tuple[str, ...] = ()

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        self._config = config or AppConfig()
        self._output_target: Optional[Tuple[str, str]] = None

    @property
    def config(self) -> AppConfig:
        return self._config

    @abstractmethod
    def generate(self, model: StructureModel, root_path: str) -> OutputDocument:
        """Render the model into this format."""

    def file_extension(self) -> str:
        return self.EXTENSION

    def format_name(self) -> str:
        return self.FORMAT_NAME

    def supports_format(self, name: str) -> bool:
        """Case-insensitive, whitespace-tolerant alias match."""
        return (name or "").strip().lower() in self.ALIASES

    def exclude_output_target(self, output_dir: str, base_name: str) -> None:
        """
        Declare the files written by the current run.

        Every `{output_dir}/{base_name}.*` file is treated as generated
        output; generators that read the project tree skip those files.

        Args:
            output_dir: Directory receiving the generated files.
            base_name: Shared stem of the generated files.
        """
        self._output_target = (os.path.normcase(os.path.abspath(output_dir)), os.path.normcase(base_name) + ".")

    def is_output_target(self, path: str) -> bool:
        if self._output_target is None:
            return False
        directory, prefix = self._output_target
        full = os.path.abspath(path)
        return (
            os.path.normcase(os.path.dirname(full)) == directory
            and os.path.normcase(os.path.basename(full)).startswith(prefix)
        )

    def _document(self, content: str) -> OutputDocument:
        return OutputDocument(content=content, extension=self.EXTENSION, format_name=self.FORMAT_NAME)

    @staticmethod
    def _timestamp() -> str:
        return datetime.now().strftime(TIMESTAMP_FORMAT)
