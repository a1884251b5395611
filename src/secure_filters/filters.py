"""Context-aware output encoding filters.

Each filter takes a value about to be interpolated into a generated document
and returns text that cannot be misread as markup, script or structural
syntax by the consuming context:

=========  ==========================================  ===============
Name       Context                                     Composition
=========  ==========================================  ===============
html       HTML text / double-quoted attribute         base
js         JS string literal                           base
jsAttr     HTML attribute carrying a JS string         js, then html
uri        URI component                               base
jsObj      JSON embedded in a script block             base
css        CSS token/value                             base
style      HTML attribute carrying CSS                 css, then html
=========  ==========================================  ===============

All filters are pure and stateless and may be called from any thread.
Only :func:`js_obj` can fail, with :class:`SerializationError`.

Escaping twice double-escapes; none of these filters is idempotent.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable
from urllib.parse import quote

from jinja2 import Undefined

from .escapes import css_escape, html_entity, js_escape
from .whitelists import (
    css_allowed,
    html_allowed,
    html_control,
    js_allowed,
    json_allowed,
    utf16_units,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class SerializationError(ValueError):
    """Raised by :func:`js_obj` when a value cannot be converted to JSON."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# Characters encodeURIComponent-style encoders leave alone but which still
# mean something in some URI sub-contexts or to lenient decoders.
_URI_EXTRA = str.maketrans({
    "!": "%21",
    '"': "%22",
    "'": "%27",
    "(": "%28",
    ")": "%29",
    "*": "%2A",
    "~": "%7E",
})

# "]]>" in any of the forms it can take after JSON escaping.
_CDATA_CLOSE = re.compile(r"\]\](?:>|\\x3E|\\u003E)", re.IGNORECASE)
_CDATA_CLOSE_ESCAPED = "\\x5D\\x5D\\x3E"


def _to_text(value: Any) -> str:
    """Coerce *value* to ``str`` once, at the filter boundary."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _encode(
    text: str,
    allowed: Callable[[int], bool],
    escape: Callable[[int], str],
) -> str:
    """Single pass: keep whitelisted code units, escape everything else."""
    out: list[str] = []
    for ch in text:
        code = ord(ch)
        if code <= 0xFFFF:
            out.append(ch if allowed(code) else escape(code))
            continue
        units = utf16_units(code)
        if all(allowed(u) for u in units):
            out.append(ch)
        else:
            out.extend(escape(u) for u in units)
    return "".join(out)


def _html_literal(code: int) -> bool:
    # \v and \f are whitelisted but still normalized as controls
    return html_allowed(code) and not html_control(code)


def _html_escape(code: int) -> str:
    if html_control(code):
        return " "
    return html_entity(code)


# ---------------------------------------------------------------------------
# Base filters
# ---------------------------------------------------------------------------

def html(value: Any) -> str:
    """Encode *value* for HTML text and double-quoted attribute values.

    C0/C1 control characters become a single space.  ``"&<>`` become
    ``&quot; &amp; &lt; &gt;``; any other character outside the whitelist
    becomes a numeric entity.
    """
    return _encode(_to_text(value), _html_literal, _html_escape)


def js(value: Any) -> str:
    """Encode *value* for a single- or double-quoted JavaScript string.

    Not safe for bare script contexts.
    """
    return _encode(_to_text(value), js_allowed, js_escape)


def uri(value: Any) -> str:
    """Percent-encode *value* as a URI component.

    UTF-8 percent-encoding of everything outside ``A-Za-z0-9-._``.  Lone
    surrogates have no UTF-8 form and are encoded as U+FFFD.
    """
    text = _to_text(value)
    text = text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")
    return quote(text, safe="").translate(_URI_EXTRA)


def js_obj(value: Any) -> Any:
    """Encode *value* as JSON safe to embed in a ``<script>`` block.

    The JSON text is backslash-escaped outside the JSON whitelist, so ``/``
    ``<`` and ``>`` never appear literally, and ``]]>`` is escaped to keep
    the output inside a CDATA section.

    A :class:`jinja2.Undefined` value is returned unchanged so callers can
    tell "no value" apart from the JSON text of one.

    Raises:
        SerializationError: if *value* cannot be serialized (circular
            references, unsupported types, NaN or Infinity).
    """
    if isinstance(value, Undefined):
        return value
    try:
        text = json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(
            f"Cannot serialize {type(value).__name__} to JSON: {exc}"
        ) from exc
    text = _encode(text, json_allowed, js_escape)
    return _CDATA_CLOSE.sub(lambda _m: _CDATA_CLOSE_ESCAPED, text)


def css(value: Any) -> str:
    """Encode *value* as a single CSS token or value.

    Not safe for selectors or rule-level syntax.
    """
    return _encode(_to_text(value), css_allowed, css_escape)


# ---------------------------------------------------------------------------
# Composite filters
# ---------------------------------------------------------------------------

def js_attr(value: Any) -> str:
    """Encode *value* for a JavaScript string inside an HTML attribute,
    e.g. ``onclick``.  JS escaping first, then HTML.
    """
    return html(js(value))


def style(value: Any) -> str:
    """Encode *value* for a CSS value inside an HTML ``style`` attribute.
    CSS escaping first, then HTML.
    """
    return html(css(value))


# ---------------------------------------------------------------------------
# Registry names
# ---------------------------------------------------------------------------

FILTER_NAMES = ("html", "js", "jsAttr", "uri", "jsObj", "css", "style")

FILTERS: dict[str, Callable[[Any], Any]] = {
    "html": html,
    "js": js,
    "jsAttr": js_attr,
    "uri": uri,
    "jsObj": js_obj,
    "css": css,
    "style": style,
}


def get_filter(name: str) -> Callable[[Any], Any]:
    """Return the filter registered as *name*.

    Raises ``KeyError`` if *name* is not one of :data:`FILTER_NAMES`.
    """
    try:
        return FILTERS[name]
    except KeyError:
        raise KeyError(
            f"Unknown filter '{name}'. "
            f"Must be one of: {', '.join(FILTER_NAMES)}"
        ) from None
