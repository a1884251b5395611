"""JSON parsing for values handed to ``jsObj`` from the command line.

Rejects repeated object keys at any depth, and the ``NaN`` / ``Infinity``
constants that ``jsObj`` could not serialize back out.
"""

from __future__ import annotations

import json


def _unique_object(pairs: list[tuple[str, object]]) -> dict:
    result: dict = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"Duplicate JSON key: {key!r}")
        result[key] = value
    return result


def _no_constant(constant: str) -> object:
    raise ValueError(f"Non-standard JSON constant not allowed: {constant!r}")


def safe_json_loads(text: str) -> object:
    """Parse JSON text, raising ``ValueError`` on repeated keys or NaN/Infinity."""
    return json.loads(
        text,
        object_pairs_hook=_unique_object,
        parse_constant=_no_constant,
    )
