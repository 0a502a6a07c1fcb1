"""Settings read from the ``nodal`` section of ``config.yml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml

from nodal.checks.connected_rules import DEFAULT_SEARCH_LIMIT
from nodal.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

VALID_FORMATS: frozenset[str] = frozenset({"rich", "json", "porcelain"})


@dataclass(frozen=True)
class NodalConfig:
    """Checker settings.

    ``isomorphism_search_limit`` caps the candidate mappings the Homomorphic
    check may try before it gives up and reports the rule unsatisfied.
    """

    isomorphism_search_limit: int = DEFAULT_SEARCH_LIMIT
    default_format: str | None = None
    warn_undrawable_lines: bool = True


def parse_config(raw: dict[str, Any]) -> NodalConfig:
    """Validate the ``nodal`` mapping of a config file.

    Raises
    ------
    ConfigError
        If a value has the wrong type or is out of range.
    """
    defaults = NodalConfig()

    limit_raw = raw.get("isomorphism_search_limit", defaults.isomorphism_search_limit)
    try:
        limit = int(limit_raw)
    except (TypeError, ValueError):
        msg = f"isomorphism_search_limit must be an integer, got {limit_raw!r}"
        raise ConfigError(msg) from None
    if limit <= 0:
        msg = f"isomorphism_search_limit must be positive, got {limit}"
        raise ConfigError(msg)

    fmt_raw = raw.get("default_format", defaults.default_format)
    fmt: str | None = None if fmt_raw is None else str(fmt_raw)
    if fmt is not None and fmt not in VALID_FORMATS:
        msg = f"Invalid default_format '{fmt}', must be one of {sorted(VALID_FORMATS)}"
        raise ConfigError(msg)

    warn_raw = raw.get("warn_undrawable_lines", defaults.warn_undrawable_lines)
    if not isinstance(warn_raw, bool):
        msg = f"warn_undrawable_lines must be true or false, got {warn_raw!r}"
        raise ConfigError(msg)

    return NodalConfig(
        isomorphism_search_limit=limit,
        default_format=fmt,
        warn_undrawable_lines=warn_raw,
    )


def load_config(config_path: Path | None) -> NodalConfig:
    """Load settings from *config_path*.

    Falls back to defaults when the path is ``None``, the file is missing or
    unreadable, or it has no ``nodal`` section.
    """
    if config_path is None or not config_path.is_file():
        return NodalConfig()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        logger.warning("Failed to read %s, using default settings", config_path)
        return NodalConfig()

    if not isinstance(data, dict):
        return NodalConfig()

    section = data.get("nodal")
    if section is None:
        return NodalConfig()
    if not isinstance(section, dict):
        msg = f"{config_path}: 'nodal' must be a mapping"
        raise ConfigError(msg)

    return parse_config(section)
