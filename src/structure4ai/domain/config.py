from __future__ import annotations

"""
Configuration Domain Management.

Defines the immutable configuration snapshot consumed by the walker, the
ignore policy and the generators, and handles its JSON persistence with
default fallback. The snapshot is passed explicitly to every component at
construction time; there is no process-wide configuration instance.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from structure4ai.domain import constants as const
from structure4ai.domain.errors import ConfigError
from structure4ai.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

# -----------------------------------------------------------------------------
# Configuration Models
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GeneralSettings:
    default_output_path: str = const.DEFAULT_OUTPUT_PATH
    show_console_animation: bool = True
    animation_delay_ms: int = const.DEFAULT_ANIMATION_DELAY_MS
    max_depth: int = -1
    include_hidden_files: bool = False


@dataclass(frozen=True)
class FilterSettings:
    ignore_folders: Tuple[str, ...] = tuple(const.DEFAULT_IGNORE_FOLDERS)
    ignore_files: Tuple[str, ...] = tuple(const.DEFAULT_IGNORE_FILES)
    ignore_extensions: Tuple[str, ...] = tuple(const.DEFAULT_IGNORE_EXTENSIONS)
    custom_ignore_patterns: Tuple[str, ...] = tuple(const.DEFAULT_CUSTOM_IGNORE_PATTERNS)


@dataclass(frozen=True)
class OutputSettings:
    formats: Tuple[str, ...] = tuple(const.DEFAULT_FORMATS)
    include_timestamp: bool = True


@dataclass(frozen=True)
class StatisticsSettings:
    calculate_file_size: bool = True
    estimate_tokens: bool = False


@dataclass(frozen=True)
class AppConfig:
    """
    Complete configuration snapshot for one invocation.

    Attributes:
        general: Output path, animation, depth and hidden-file options.
        filters: Ignore rule lists.
        output: Requested formats and header options.
        statistics: Size and token computation switches.
    """
    general: GeneralSettings = field(default_factory=GeneralSettings)
    filters: FilterSettings = field(default_factory=FilterSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    statistics: StatisticsSettings = field(default_factory=StatisticsSettings)


# -----------------------------------------------------------------------------
# Dictionary Conversion
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration as a JSON-compatible dictionary.

    Returns:
        Dict[str, Any]: Sectioned default values.
    """
    return config_to_dict(AppConfig())


def config_to_dict(config: AppConfig) -> Dict[str, Any]:
    """
    Serialize a configuration snapshot into plain JSON types.

    Tuples become lists so the result round-trips through `json`.
    """
    data = asdict(config)
    for section in data.values():
        for key, value in section.items():
            if isinstance(value, tuple):
                section[key] = list(value)
    return data


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def default_config_path() -> str:
    """Resolve the configuration file location inside the user data dir."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def load_config_dict(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the raw configuration dictionary from disk.

    Without an explicit path the user data directory is used, and a missing
    or corrupted file falls back to defaults. An explicit path must exist
    and contain a JSON object.

    Args:
        path: Optional explicit configuration file.

    Returns:
        Dict[str, Any]: Raw configuration merged over the defaults.

    Raises:
        ConfigError: If an explicit configuration file is missing or invalid.
    """
    defaults = get_default_config()
    explicit = path is not None
    config_path = path if explicit else default_config_path()

    if not os.path.exists(config_path):
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        logger.debug("Config file not found. Returning defaults.")
        return defaults

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        if explicit:
            raise ConfigError(f"Failed to load configuration '{config_path}': {e}") from e
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        if explicit:
            raise ConfigError(f"Configuration file '{config_path}' must contain a JSON object.")
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    # Merge section by section so new keys keep their defaults
    merged = dict(defaults)
    for section, values in data.items():
        if section in merged and isinstance(values, dict):
            merged[section] = {**merged[section], **values}
        else:
            merged[section] = values
    return merged


def save_config(config: AppConfig, path: Optional[str] = None) -> bool:
    """
    Persist a configuration snapshot to disk.

    Args:
        config: The snapshot to save.
        path: Optional explicit target; defaults to the user data directory.

    Returns:
        bool: True if the file was written.
    """
    config_path = path or default_config_path()
    try:
        parent = os.path.dirname(os.path.abspath(config_path))
        os.makedirs(parent, exist_ok=True)
        payload = {"version": const.CURRENT_CONFIG_VERSION, **config_to_dict(config)}
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False
