"""Escape sequence generators.

One generator per target context.  Each maps a single disallowed UTF-16
code unit to text that decodes back to that code unit under the context's
own escaping grammar.
"""

from __future__ import annotations

# Mnemonic entities folks expect to see in HTML output.
_HTML_NAMED = {
    0x22: "&quot;",
    0x26: "&amp;",
    0x3C: "&lt;",
    0x3E: "&gt;",
}

# REPLACEMENT CHARACTER U+FFFD
JS_REPLACEMENT = "\\uFFFD"
CSS_REPLACEMENT = "\\fffd "


def html_entity(code: int) -> str:
    """Entity for *code*: named for ``"&<>``, decimal below 100, else hex.

    Decimal keeps small code points short.  Code points that need a UTF-16
    surrogate pair get one entity per code unit, which is not strictly valid
    HTML but is tolerated by browsers.
    """
    named = _HTML_NAMED.get(code)
    if named is not None:
        return named
    if code < 100:
        return f"&#{code};"
    return f"&#x{code:X};"


def js_escape(code: int) -> str:
    """Backslash escape for JavaScript string and JSON contexts.

    ASCII becomes ``\\xHH`` and everything else ``\\uHHHH`` (uppercase hex,
    zero padded).  ``\\u`` only carries four hex digits, so a value that
    needs more becomes the replacement character rather than an escape the
    consumer would misread.
    """
    if code < 0x80:
        return f"\\x{code:02X}"
    if code > 0xFFFF:
        return JS_REPLACEMENT
    return f"\\u{code:04X}"


def css_escape(code: int) -> str:
    """CSS hex escape: backslash, lowercase hex, terminating space.

    NUL cannot be escaped to itself in CSS and becomes U+FFFD.
    """
    if code == 0:
        return CSS_REPLACEMENT
    return f"\\{code:x} "
