"""Strict parsers for config files and CLI input."""

from .safe_json import safe_json_loads
from .safe_yaml import safe_yaml_load

__all__ = ["safe_json_loads", "safe_yaml_load"]
