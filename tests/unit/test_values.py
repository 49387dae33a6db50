"""
Unit tests for the dynamic value union.
"""

import pytest

from tmpl_funcs.lib.values import Kind, Value


class TestFromPython:
    def test_scalars(self):
        assert Value.from_python(None).kind is Kind.NIL
        assert Value.from_python(True).kind is Kind.BOOL
        assert Value.from_python(3).kind is Kind.INT
        assert Value.from_python(3.5).kind is Kind.FLOAT
        assert Value.from_python("s").kind is Kind.STRING

    def test_nested(self):
        v = Value.from_python({"a": [1, "x", {"b": None}]})
        assert v.kind is Kind.MAP
        assert v.data["a"].kind is Kind.ARRAY
        assert v.to_python() == {"a": [1, "x", {"b": None}]}

    def test_existing_value_returned(self):
        v = Value.of_str("x")
        assert Value.from_python(v) is v

    def test_rejects_unknown_types(self):
        with pytest.raises(TypeError):
            Value.from_python(object())

    def test_rejects_non_string_map_keys(self):
        with pytest.raises(TypeError):
            Value.from_python({1: "x"})


class TestEquality:
    def test_kinds_must_match(self):
        assert Value.of_int(1) != Value.of_float(1.0)
        assert Value.of_int(1) != Value.of_bool(True)
        assert Value.nil() == Value.nil()

    def test_arrays_ordered(self):
        assert Value.from_python([1, 2]) == Value.from_python([1, 2])
        assert Value.from_python([1, 2]) != Value.from_python([2, 1])

    def test_maps_unordered(self):
        a = Value.from_python({"x": "1", "y": ["z"]})
        b = Value.from_python({"y": ["z"], "x": "1"})
        assert a == b
        assert a != Value.from_python({"x": "1"})

    def test_not_equal_to_plain_python(self):
        assert Value.of_str("x") != "x"


class TestImmutability:
    def test_attributes_read_only(self):
        v = Value.of_str("x")
        with pytest.raises(AttributeError):
            v.data = "y"

    def test_map_read_only(self):
        v = Value.from_python({"a": "b"})
        with pytest.raises(TypeError):
            v.data["a"] = Value.of_str("c")

    def test_source_list_not_shared(self):
        items = ["a"]
        v = Value.from_python(items)
        items.append("b")
        assert v.to_python() == ["a"]


class TestStringForm:
    @pytest.mark.parametrize("obj, expected", [
        (None, "<nil>"),
        (True, "true"),
        (False, "false"),
        (42, "42"),
        (2.5, "2.5"),
        (2.0, "2"),
        ("text", "text"),
        ([1, "a", [True]], "[1 a [true]]"),
        ({"b": 1, "a": "x"}, "map[a:x b:1]"),
        ([], "[]"),
    ])
    def test_go_style(self, obj, expected):
        assert str(Value.from_python(obj)) == expected

    def test_repr(self):
        assert repr(Value.of_str("x")) == "Value.String('x')"
        assert repr(Value.nil()) == "Value.Nil"
