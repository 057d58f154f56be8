from __future__ import annotations

"""
Domain Exception Hierarchy.

Defines the only failure categories allowed to escape the structure pipeline.
Everything deeper in the tree (access errors, per-node errors, per-file read
errors) is absorbed locally and surfaces as a marker in the generated output.
"""

from typing import Iterable


class Structure4AIError(Exception):
    """Base class for all errors raised by the structure pipeline."""


class RootPathError(Structure4AIError):
    """
    Raised when the walk root does not exist, is not a directory,
    or cannot be listed at all.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid root path '{path}': {reason}")


class UnsupportedFormatError(Structure4AIError):
    """Raised when a format name does not resolve in the generator registry."""

    def __init__(self, fmt: str, supported: Iterable[str]) -> None:
        self.format = fmt
        self.supported = list(supported)
        super().__init__(
            f"Format '{fmt}' is not supported. "
            f"Supported formats: {', '.join(self.supported)}"
        )


class ConfigError(Structure4AIError):
    """Raised when an explicitly requested configuration file cannot be used."""
