"""
Dynamic value union passed between the template evaluator and builtins.

Every template value is one of Nil, Bool, Int, Float, String, Array or Map.
Values are immutable: arrays hold tuples, maps hold read-only mappings.

Usage:
    from tmpl_funcs.lib.values import Value
    v = Value.from_python(["hello", "world"])
    v.kind   # Kind.ARRAY
    str(v)   # "[hello world]"
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class Kind(str, Enum):
    NIL = "Nil"
    BOOL = "Bool"
    INT = "Int"
    FLOAT = "Float"
    STRING = "String"
    ARRAY = "Array"
    MAP = "Map"


class Value:
    """One instance of the dynamic value union."""

    __slots__ = ("kind", "data")

    def __init__(self, kind: Kind, data: Any = None):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "data", data)

    def __setattr__(self, name, value):
        raise AttributeError("Value is immutable")

    # ---------------- Constructors ----------------

    @classmethod
    def nil(cls) -> "Value":
        return cls(Kind.NIL)

    @classmethod
    def of_bool(cls, b: bool) -> "Value":
        return cls(Kind.BOOL, bool(b))

    @classmethod
    def of_int(cls, i: int) -> "Value":
        return cls(Kind.INT, int(i))

    @classmethod
    def of_float(cls, f: float) -> "Value":
        return cls(Kind.FLOAT, float(f))

    @classmethod
    def of_str(cls, s: str) -> "Value":
        return cls(Kind.STRING, str(s))

    @classmethod
    def of_array(cls, items) -> "Value":
        return cls(Kind.ARRAY, tuple(cls.from_python(x) for x in items))

    @classmethod
    def of_map(cls, mapping: Mapping) -> "Value":
        entries = {}
        for k, v in mapping.items():
            if not isinstance(k, str):
                raise TypeError(f"Map keys must be strings, got {type(k).__name__}")
            entries[k] = cls.from_python(v)
        return cls(Kind.MAP, MappingProxyType(entries))

    @classmethod
    def from_python(cls, obj) -> "Value":
        """
        Build a Value from a plain Python object.

        None, bool, int, float, str, list/tuple and str-keyed dicts are
        accepted (recursively). Existing Values are returned as-is.
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.nil()
        # bool is a subclass of int, so check it first
        if isinstance(obj, bool):
            return cls.of_bool(obj)
        if isinstance(obj, int):
            return cls.of_int(obj)
        if isinstance(obj, float):
            return cls.of_float(obj)
        if isinstance(obj, str):
            return cls.of_str(obj)
        if isinstance(obj, (list, tuple)):
            return cls.of_array(obj)
        if isinstance(obj, Mapping):
            return cls.of_map(obj)
        raise TypeError(f"Cannot convert {type(obj).__name__} to a template Value")

    # ---------------- Accessors ----------------

    def to_python(self):
        """Inverse of from_python: arrays become lists, maps become dicts."""
        if self.kind is Kind.ARRAY:
            return [v.to_python() for v in self.data]
        if self.kind is Kind.MAP:
            return {k: v.to_python() for k, v in self.data.items()}
        return self.data

    @property
    def is_nil(self) -> bool:
        return self.kind is Kind.NIL

    # ---------------- Protocols ----------------

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        if self.kind is Kind.MAP:
            return dict(self.data) == dict(other.data)
        return self.data == other.data

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __repr__(self) -> str:
        if self.kind is Kind.NIL:
            return "Value.Nil"
        return f"Value.{self.kind.value}({self.to_python()!r})"

    def __str__(self) -> str:
        """Render the value the way Go templates print it."""
        if self.kind is Kind.NIL:
            return "<nil>"
        if self.kind is Kind.BOOL:
            return "true" if self.data else "false"
        if self.kind is Kind.INT:
            return str(self.data)
        if self.kind is Kind.FLOAT:
            return _format_float(self.data)
        if self.kind is Kind.STRING:
            return self.data
        if self.kind is Kind.ARRAY:
            return "[" + " ".join(str(v) for v in self.data) + "]"
        # Map: Go prints maps with sorted keys
        pairs = (f"{k}:{self.data[k]}" for k in sorted(self.data))
        return "map[" + " ".join(pairs) + "]"


def _format_float(f: float) -> str:
    if f != f:
        return "NaN"
    if f in (float("inf"), float("-inf")):
        return "+Inf" if f > 0 else "-Inf"
    if f.is_integer() and abs(f) < 1e21:
        return str(int(f))
    return repr(f)
