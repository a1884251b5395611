"""Per-context code point classifiers.

Each ``*_allowed`` predicate answers one question: may this code point be
written literally into the target context?  Anything a predicate rejects is
handed to the matching generator in :mod:`secure_filters.escapes`.

Predicates take UTF-16 code units (0x0000-0xFFFF).  Supplementary-plane
characters are classified as their two surrogate halves, see
:func:`utf16_units`.

The tables are built once at import time and never change.
"""

from __future__ import annotations

import string

# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


def _codes(chars: str) -> frozenset[int]:
    return frozenset(ord(c) for c in chars)


_ALNUM = _codes(string.ascii_letters + string.digits)

# "-" is both URI and HTML safe, so it is allowed here too.
_JS_SAFE = _ALNUM | _codes(",-._")

# JSON metacharacters on top of the JS set.
_JSON_SAFE = _JS_SAFE | _codes('":[\\]{}')

# Allowable whitespace plus the JS set.  Everything from NO-BREAK SPACE
# U+00A0 upwards is handled by range in html_allowed().
_HTML_SAFE_ASCII = _JS_SAFE | _codes("\t\n\v\f\r ")

# No safe HTML representation; normalized to a space instead.
_HTML_CONTROL = frozenset(
    list(range(0x00, 0x09))
    + [0x0B, 0x0C]
    + list(range(0x0E, 0x20))
    + list(range(0x7F, 0xA0))
)

SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF
BMP_MAX = 0xFFFF


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def html_control(code: int) -> bool:
    """Return True for C0/C1 controls that the HTML filter turns into spaces."""
    return code in _HTML_CONTROL


def html_allowed(code: int) -> bool:
    """HTML text and double-quoted attribute values."""
    return code in _HTML_SAFE_ASCII or 0xA0 <= code <= BMP_MAX


def js_allowed(code: int) -> bool:
    """Quoted JavaScript string literals."""
    return code in _JS_SAFE


def json_allowed(code: int) -> bool:
    """JSON text embedded in a script block."""
    return code in _JSON_SAFE


def css_allowed(code: int) -> bool:
    """A single CSS token or value.

    Only alphanumerics and surrogate halves.  The rest of Unicode is left
    out to avoid charset encoding issues.
    """
    return code in _ALNUM or SURROGATE_MIN <= code <= SURROGATE_MAX


# ---------------------------------------------------------------------------
# Code units
# ---------------------------------------------------------------------------

def utf16_units(code: int) -> tuple[int, ...]:
    """Split *code* into the UTF-16 code units that represent it.

    BMP code points (lone surrogates included) come back as a 1-tuple;
    anything above U+FFFF becomes a (high, low) surrogate pair.
    """
    if code <= BMP_MAX:
        return (code,)
    code -= 0x10000
    return (SURROGATE_MIN + (code >> 10), 0xDC00 + (code & 0x3FF))
