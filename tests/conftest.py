from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a small sample project tree and default configuration.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from structure4ai.domain.config import AppConfig, get_default_config  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user data directory at a throwaway location."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("LOCALAPPDATA", str(home))
    return home


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """Return a complete raw configuration dictionary, as stored on disk."""
    return get_default_config()


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a small project tree.

    Structure:
    /project
      /docs
        guide.md
      /src
        /utils
          helpers.py
        main.py
      /bin            (ignored folder)
        out.dll
      /.git           (hidden, ignored)
        HEAD
      README.md
      setup.py
    """
    root = tmp_path / "project"
    (root / "src" / "utils").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "bin").mkdir()
    (root / ".git").mkdir()

    (root / "src" / "main.py").write_text("print('hello')\n", encoding="utf-8")
    (root / "src" / "utils" / "helpers.py").write_text("def helper():\n    return 1\n", encoding="utf-8")
    (root / "docs" / "guide.md").write_text("# Guide\n", encoding="utf-8")
    (root / "bin" / "out.dll").write_bytes(b"\x00\x01")
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (root / "README.md").write_text("# Project\n", encoding="utf-8")
    (root / "setup.py").write_text("from setuptools import setup\n", encoding="utf-8")
    return root
