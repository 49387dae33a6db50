"""
Unit tests for the builtin registry and name-based dispatch.
"""

import pytest

from tmpl_funcs import call, lookup
from tmpl_funcs.lib.builtins.registry import FUNCTION_REGISTRY, FUNCTION_SIG, FUNCTIONS
from tmpl_funcs.lib.errors import ArityError, ErrorCategory, UnknownFunctionError
from tmpl_funcs.lib.values import Value

EXPECTED_NAMES = {
    "base64encode", "base64decode", "base32encode", "base32decode",
    "abbrev", "abbrevboth", "trunc", "substr", "initials", "untitle", "plural",
    "randAlphaNum", "randAlpha", "randAscii", "randNumeric",
    "replace", "join", "split", "contains", "hasSuffix", "hasPrefix",
    "trim", "trimAll", "trimSuffix", "trimPrefix",
}


class TestRegistry:
    def test_all_names_registered(self):
        assert set(FUNCTION_REGISTRY) == EXPECTED_NAMES

    def test_signatures_match_adapters(self):
        for name, (fn, (lo, hi)) in FUNCTIONS.items():
            assert lo == hi == fn.arity, name
            assert FUNCTION_SIG[name] == (lo, hi)

    def test_lookup(self):
        assert lookup("trimAll") is FUNCTION_REGISTRY["trimAll"]

    def test_unknown_function(self):
        with pytest.raises(UnknownFunctionError) as exc:
            lookup("nope")
        assert exc.value.detail().category is ErrorCategory.UNKNOWN_FUNCTION


class TestCall:
    def test_scenarios(self, vargs):
        assert call("abbrev", vargs(4, "foobar")) == Value.of_str("f...")
        assert call("abbrevboth", vargs(5, 7, "foobarfoobar")) == Value.of_str("...r...")
        assert call("initials", vargs("Matt Butcher")) == Value.of_str("MB")
        assert call("trimAll", vargs(" fr", "  foobar ")) == Value.of_str("ooba")
        assert call("split", vargs(" ", "foo bar")) == Value.from_python({"_0": "foo", "_1": "bar"})
        assert call("join", vargs("_", ["hello", "world"])) == Value.of_str("hello_world")

    def test_errors_surface(self, vargs):
        with pytest.raises(ArityError):
            call("trim", vargs())

    def test_error_detail(self, vargs):
        with pytest.raises(ArityError) as exc:
            call("abbrev", vargs("x"))
        detail = exc.value.detail()
        assert detail.category is ErrorCategory.ARITY
        assert detail.function == "abbrev"
        assert detail.details == {"expected": 2, "got": 1}
