"""Adapter YAML config loader and validator.

Parses a filter registration config into a validated ``AdapterConfig``.
The encoding filters themselves take no configuration; this only controls
which of them the adapter installs into a template engine and under which
extra names.

Config shape::

    secure_filters:
      filters: [html, js, jsAttr, uri, jsObj, css, style]  # optional subset
      aliases:                                             # optional
        e: html
        escapejs: js
      mark_safe: false
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .filters import FILTER_NAMES
from .utils.safe_yaml import safe_yaml_load

logger = logging.getLogger("secure_filters.config")

#: Environment variable naming the default config file for the CLI.
CONFIG_ENV_VAR = "SECURE_FILTERS_CONFIG"

_KNOWN_FIELDS = frozenset({"filters", "aliases", "mark_safe"})


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class FilterConfigError(Exception):
    """Raised when the adapter config is invalid."""


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass
class AdapterConfig:
    """Which filters to register, and how.

    Attributes:
        filters: Registry names to install.  All seven by default.
        aliases: Extra registry names mapped to one of the seven filters.
        mark_safe: Wrap text results in ``markupsafe.Markup`` so an
            autoescaping engine does not escape them again.
    """
    filters: list[str] = field(default_factory=lambda: list(FILTER_NAMES))
    aliases: dict[str, str] = field(default_factory=dict)
    mark_safe: bool = False


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def load_adapter_config(config_path: str | os.PathLike) -> AdapterConfig:
    """Load and validate an adapter YAML config file.

    Raises:
        FilterConfigError: If the file is missing, is not valid YAML, or
            fails validation.
    """
    config_file = Path(config_path)
    if not config_file.is_file():
        raise FilterConfigError(f"Config file not found: {config_path}")

    try:
        raw = safe_yaml_load(config_file.read_text())
    except yaml.YAMLError as e:
        raise FilterConfigError(f"Invalid YAML in config file: {e}") from e
    except ValueError as e:
        raise FilterConfigError(f"Invalid config file: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise FilterConfigError(
            "Config file must contain a YAML mapping (got "
            f"{type(raw).__name__})"
        )
    return parse_adapter_config(raw)


def parse_adapter_config(raw: dict[str, Any]) -> AdapterConfig:
    """Validate an already-loaded config mapping."""
    section = raw.get("secure_filters")
    if section is None:
        section = {}
    if not isinstance(section, dict):
        raise FilterConfigError(
            "secure_filters must be a mapping (got "
            f"{type(section).__name__})"
        )

    for key in section:
        if key not in _KNOWN_FIELDS:
            logger.warning("Unknown config field '%s' will be ignored.", key)

    filters_raw = section.get("filters", list(FILTER_NAMES))
    if isinstance(filters_raw, str):
        filters_raw = [filters_raw]
    if not isinstance(filters_raw, list):
        raise FilterConfigError("filters must be a list of filter names")
    filters = [str(name) for name in filters_raw]
    for name in filters:
        _check_filter_name(name, "filters")

    aliases_raw = section.get("aliases") or {}
    if not isinstance(aliases_raw, dict):
        raise FilterConfigError("aliases must be a mapping of name: filter")
    aliases: dict[str, str] = {}
    for alias, target in aliases_raw.items():
        alias, target = str(alias), str(target)
        if alias in FILTER_NAMES:
            raise FilterConfigError(
                f"Alias '{alias}' shadows a built-in filter name"
            )
        _check_filter_name(target, f"aliases.{alias}")
        aliases[alias] = target

    mark_safe = section.get("mark_safe", False)
    if not isinstance(mark_safe, bool):
        raise FilterConfigError("mark_safe must be true or false")

    return AdapterConfig(filters=filters, aliases=aliases, mark_safe=mark_safe)


def default_config_path() -> str | None:
    """Config path from ``SECURE_FILTERS_CONFIG``, or ``None`` when unset."""
    return os.environ.get(CONFIG_ENV_VAR) or None


def _check_filter_name(name: str, where: str) -> None:
    if name not in FILTER_NAMES:
        raise FilterConfigError(
            f"Invalid filter name in {where}: '{name}'. "
            f"Must be one of: {', '.join(FILTER_NAMES)}"
        )
