"""Tests for the JSON-in-script filter (jsObj).

The only filter with a failure mode: values that cannot be serialized raise
SerializationError.
"""

import json

import pytest
from jinja2 import StrictUndefined, Undefined

from secure_filters import SerializationError, js_obj


# =============================================================================
# ENCODING
# =============================================================================

class TestJsObjEncoding:
    def test_script_close_in_string(self):
        """Slash and angle brackets are hex-escaped inside JSON strings."""
        out = js_obj({"a": "</script>"})
        assert out == '{"a":"\\x3C\\x2Fscript\\x3E"}'
        assert "<" not in out and ">" not in out and "/" not in out

    def test_scalars(self):
        assert js_obj(None) == "null"
        assert js_obj(True) == "true"
        assert js_obj(False) == "false"
        assert js_obj(42) == "42"
        assert js_obj(-1.5) == "-1.5"
        assert js_obj("abc") == '"abc"'

    def test_compact_separators(self):
        """No whitespace is added between tokens."""
        assert js_obj({"a": [1, 2], "b": {"c": None}}) == '{"a":[1,2],"b":{"c":null}}'

    def test_key_order_preserved(self):
        assert js_obj({"b": 1, "a": 2}) == '{"b":1,"a":2}'

    def test_space_escaped_in_strings(self):
        assert js_obj([1, "x y"]) == '[1,"x\\x20y"]'

    def test_json_escapes_untouched(self):
        """Backslash and double quote are JSON metacharacters and stay."""
        assert js_obj('a"b') == '"a\\"b"'
        assert js_obj("a\nb") == '"a\\nb"'
        assert js_obj("a\\b") == '"a\\\\b"'

    def test_apostrophe_and_bang(self):
        assert js_obj("'") == '"\\x27"'
        assert js_obj("<!--") == '"\\x3C\\x21--"'

    def test_non_ascii(self):
        assert js_obj("caf\xe9") == '"caf\\u00E9"'

    def test_supplementary_character(self):
        """Emoji become a JSON-valid surrogate pair escape."""
        out = js_obj("\U0001F600")
        assert out == '"\\uD83D\\uDE00"'
        assert json.loads(out) == "\U0001F600"

    def test_tuple_serializes_as_array(self):
        assert js_obj((1, "a")) == '[1,"a"]'


# =============================================================================
# CDATA GUARD
# =============================================================================

class TestCdataGuard:
    def test_cdata_close_in_string(self):
        """]]> in data never survives in any form."""
        out = js_obj({"k": "]]>"})
        assert out == '{"k":"\\x5D\\x5D\\x3E"}'
        assert "]]" not in out

    def test_cdata_close_mid_string(self):
        """Text around ]]> is kept; only the closing sequence is replaced."""
        out = js_obj(["a]]>b"])
        assert out == '["a\\x5D\\x5D\\x3Eb"]'

    def test_brackets_alone_untouched(self):
        """]] without > is plain JSON structure and is left alone."""
        assert js_obj([[1]]) == "[[1]]"
        assert js_obj("]]") == '"]]"'


# =============================================================================
# UNDEFINED
# =============================================================================

class TestUndefined:
    def test_undefined_passes_through(self):
        """An undefined template value is returned unchanged, not stringified."""
        value = Undefined(name="missing")
        assert js_obj(value) is value

    def test_strict_undefined_passes_through(self):
        value = StrictUndefined(name="missing")
        assert js_obj(value) is value

    def test_none_is_not_undefined(self):
        """None is a real JSON value."""
        assert js_obj(None) == "null"


# =============================================================================
# FAILURES
# =============================================================================

class TestSerializationFailures:
    def test_self_referential_dict(self):
        obj = {}
        obj["self"] = obj
        with pytest.raises(SerializationError) as exc_info:
            js_obj(obj)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_self_referential_list(self):
        items = []
        items.append(items)
        with pytest.raises(SerializationError):
            js_obj(items)

    @pytest.mark.parametrize("value", [
        {1, 2},
        b"bytes",
        object(),
        {"nested": {"bad": {1}}},
        {(1, 2): "tuple key"},
    ])
    def test_unsupported_types(self, value):
        with pytest.raises(SerializationError, match="Cannot serialize"):
            js_obj(value)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), [float("-inf")]])
    def test_non_finite_floats(self, value):
        """NaN and Infinity have no JSON form."""
        with pytest.raises(SerializationError):
            js_obj(value)

    def test_is_a_value_error(self):
        """Callers catching ValueError also catch serialization failures."""
        with pytest.raises(ValueError):
            js_obj({1, 2})
