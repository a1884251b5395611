"""Register the secure filters with a template engine.

Works with anything that keeps its filters in a mutable mapping: the
mapping itself, or an object exposing it as a ``filters`` attribute, such
as a ``jinja2.Environment``.

Usage::

    from jinja2 import Environment
    from secure_filters.adapters import configure

    env = configure(Environment())
    env.from_string("<a onclick=\\"go('{{ name|jsAttr }}')\\">").render(name=...)
"""

from __future__ import annotations

import functools
import logging
from collections.abc import MutableMapping
from typing import Any, Callable, Optional

from jinja2 import Undefined
from markupsafe import Markup

from ..config import AdapterConfig
from ..filters import get_filter

logger = logging.getLogger("secure_filters.adapters")


def _as_markup(fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Wrap *fn* so text results are already marked safe."""
    @functools.wraps(fn)
    def wrapper(value):
        result = fn(value)
        if isinstance(result, Undefined):
            return result
        return Markup(result)
    return wrapper


def _filter_registry(target: Any) -> MutableMapping:
    if isinstance(target, MutableMapping):
        return target
    registry = getattr(target, "filters", None)
    if registry is None:
        registry = {}
        target.filters = registry
    if not isinstance(registry, MutableMapping):
        raise TypeError(
            f"{type(target).__name__}.filters is not a mutable mapping "
            f"(got {type(registry).__name__})"
        )
    return registry


def configure(target: Any, config: Optional[AdapterConfig] = None) -> Any:
    """Install the secure filters into *target*'s filter registry.

    Existing entries with the same names are overwritten.  Returns
    *target* so the call can be chained.
    """
    if config is None:
        config = AdapterConfig()
    registry = _filter_registry(target)

    names = list(config.filters) + list(config.aliases)
    for name in names:
        fn = get_filter(config.aliases.get(name, name))
        if config.mark_safe:
            fn = _as_markup(fn)
        registry[name] = fn
        logger.debug("Registered filter '%s' -> %s", name, fn.__name__)
    return target
