from __future__ import annotations

"""
Configuration Validation Service.

Turns the raw configuration dictionary (from disk or from tests) into an
immutable AppConfig. Values of the wrong type are coerced where the intent
is clear and otherwise replaced by defaults, with a warning for each
correction. Strict mode raises ConfigError instead.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from structure4ai.domain.config import (
    AppConfig,
    FilterSettings,
    GeneralSettings,
    OutputSettings,
    StatisticsSettings,
)
from structure4ai.domain.errors import ConfigError

logger = logging.getLogger(__name__)

_SECTIONS = ("general", "filters", "output", "statistics")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[AppConfig, List[str]]:
    """
    Validate and normalize a raw configuration dictionary.

    Missing sections and keys take their defaults. Unknown keys are ignored.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise ConfigError on type mismatch instead of coercing.

    Returns:
        Tuple[AppConfig, List[str]]: The normalized snapshot and the warnings
        produced while coercing it.
    """
    warnings: List[str] = []
    defaults = AppConfig()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise ConfigError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    sections: Dict[str, Dict[str, Any]] = {}
    for name in _SECTIONS:
        raw = config.get(name)
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            msg = f"Invalid section '{name}': expected object, received {type(raw).__name__}."
            if strict:
                raise ConfigError(msg)
            warnings.append(f"{msg} Using defaults.")
            raw = {}
        sections[name] = raw

    g, d = sections["general"], defaults.general
    general = GeneralSettings(
        default_output_path=_as_str(
            g.get("default_output_path"), d.default_output_path, "general.default_output_path", warnings, strict
        ),
        show_console_animation=_as_bool(
            g.get("show_console_animation"), d.show_console_animation, "general.show_console_animation", warnings, strict
        ),
        animation_delay_ms=max(0, _as_int(
            g.get("animation_delay_ms"), d.animation_delay_ms, "general.animation_delay_ms", warnings, strict
        )),
        max_depth=_as_int(g.get("max_depth"), d.max_depth, "general.max_depth", warnings, strict),
        include_hidden_files=_as_bool(
            g.get("include_hidden_files"), d.include_hidden_files, "general.include_hidden_files", warnings, strict
        ),
    )

    f, df = sections["filters"], defaults.filters
    filters = FilterSettings(
        ignore_folders=tuple(_as_list_str(
            f.get("ignore_folders"), df.ignore_folders, "filters.ignore_folders", warnings, strict
        )),
        ignore_files=tuple(_as_list_str(
            f.get("ignore_files"), df.ignore_files, "filters.ignore_files", warnings, strict
        )),
        ignore_extensions=tuple(_normalize_extensions(_as_list_str(
            f.get("ignore_extensions"), df.ignore_extensions, "filters.ignore_extensions", warnings, strict
        ), warnings)),
        custom_ignore_patterns=tuple(_as_list_str(
            f.get("custom_ignore_patterns"), df.custom_ignore_patterns,
            "filters.custom_ignore_patterns", warnings, strict
        )),
    )

    o, do = sections["output"], defaults.output
    formats = _as_list_str(o.get("formats"), do.formats, "output.formats", warnings, strict)
    if not formats:
        warnings.append("Field 'output.formats' is empty. Using default formats.")
        formats = list(do.formats)
    output = OutputSettings(
        formats=tuple(formats),
        include_timestamp=_as_bool(
            o.get("include_timestamp"), do.include_timestamp, "output.include_timestamp", warnings, strict
        ),
    )

    s, ds = sections["statistics"], defaults.statistics
    statistics = StatisticsSettings(
        calculate_file_size=_as_bool(
            s.get("calculate_file_size"), ds.calculate_file_size, "statistics.calculate_file_size", warnings, strict
        ),
        estimate_tokens=_as_bool(
            s.get("estimate_tokens"), ds.estimate_tokens, "statistics.estimate_tokens", warnings, strict
        ),
    )

    for w in warnings:
        logger.warning(w)

    return AppConfig(general=general, filters=filters, output=output, statistics=statistics), warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _fail(msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ConfigError(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    _fail(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    _fail(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Accept integers and integral strings; bools are rejected."""
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    if not strict:
        if isinstance(value, float) and value.is_integer():
            warnings.append(f"Field '{field}' converted from float {value} to int.")
            return int(value)
        if isinstance(value, str):
            try:
                converted = int(value.strip())
            except ValueError:
                pass
            else:
                warnings.append(f"Field '{field}' converted from '{value}' to {converted}.")
                return converted

    _fail(f"Invalid field '{field}': expected int, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_list_str(
        value: Any,
        fallback: Sequence[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> List[str]:
    """
    Ensure input is a list of stripped strings, supporting CSV strings.

    An explicit empty list is kept as-is: it disables that rule set.
    """
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise ConfigError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    _fail(f"Invalid field '{field}': expected list[str], received {type(value).__name__}.", warnings, strict)
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str], warnings: List[str]) -> List[str]:
    """Prefix every extension with a dot and lower-case it."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip().lower()
        if not e.startswith("."):
            warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
            e = "." + e
        out.append(e)
    return out
