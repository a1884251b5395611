"""secure-filters: context-aware output encoding for templates.

Encodes values for safe interpolation into HTML text and attributes,
JavaScript strings, URI components, JSON in script blocks, and CSS.
"""

from .version import __version__
from .filters import (
    FILTER_NAMES,
    FILTERS,
    SerializationError,
    css,
    get_filter,
    html,
    js,
    js_attr,
    js_obj,
    style,
    uri,
)
from .adapters import configure

__all__ = [
    "__version__",
    "FILTER_NAMES",
    "FILTERS",
    "SerializationError",
    "configure",
    "css",
    "get_filter",
    "html",
    "js",
    "js_attr",
    "js_obj",
    "style",
    "uri",
]
