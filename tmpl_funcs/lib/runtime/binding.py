"""
Binding adapter between template Values and annotated Python builtins.

A builtin is written against concrete parameter types:

    @builtin
    def abbrev(width: int, s: str) -> str:
        ...

and the decorator turns it into a callable taking a sequence of template
Values and returning a Value:

    abbrev([Value.of_int(4), Value.of_str("foobar")])  # Value.String('f...')

Each call goes through the same steps:
  1. arity check against the number of declared parameters
  2. every argument must be a Value (DowncastError otherwise)
  3. each Value is converted to the declared parameter type (ConvertError)
  4. the function runs; a ValueError it raises becomes a DomainError
  5. the result is wrapped into the Value variant of the return annotation

Supported parameter types: str, int, Unsigned, float, bool, Dict[str, str],
and Value (passed through untouched). Return types: the same minus Unsigned.
Unsupported annotations are rejected when the builtin is defined.
"""

import inspect
import math
from functools import wraps
from typing import Any, Callable, Dict, NewType, Sequence, get_args, get_origin, get_type_hints

from tmpl_funcs.fn_logging import get_logger
from tmpl_funcs.lib.errors import ArityError, BindError, ConvertError, DomainError, DowncastError
from tmpl_funcs.lib.values import Kind, Value

logger = get_logger(__name__)

# Non-negative integer parameter (e.g. a character count)
Unsigned = NewType("Unsigned", int)

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1
U64_MAX = 2 ** 64 - 1

_STR_MAP = "Dict[str, str]"


class _Mismatch(Exception):
    """Internal: a Value could not be converted; reason is optional detail."""

    def __init__(self, reason: str = None):
        super().__init__(reason)
        self.reason = reason


# ---------------- Value -> Python converters ----------------

def _require(v: Value, kind: Kind):
    if v.kind is not kind:
        raise _Mismatch()
    return v.data


def _integer(v: Value, lo: int, hi: int) -> int:
    if v.kind is Kind.INT:
        n = v.data
    elif v.kind is Kind.FLOAT:
        if not math.isfinite(v.data):
            raise _Mismatch(f"{v.data} is not a finite number")
        n = math.trunc(v.data)
    else:
        raise _Mismatch()
    if n < lo or n > hi:
        raise _Mismatch(f"{n} is out of range [{lo}, {hi}]")
    return n


def _to_str(v: Value) -> str:
    return _require(v, Kind.STRING)


def _to_int(v: Value) -> int:
    return _integer(v, I64_MIN, I64_MAX)


def _to_unsigned(v: Value) -> int:
    return _integer(v, 0, U64_MAX)


def _to_float(v: Value) -> float:
    if v.kind is Kind.FLOAT:
        return v.data
    if v.kind is Kind.INT:
        try:
            return float(v.data)
        except OverflowError:
            raise _Mismatch(f"{v.data} is too large for a float")
    raise _Mismatch()


def _to_bool(v: Value) -> bool:
    return _require(v, Kind.BOOL)


def _to_str_map(v: Value) -> Dict[str, str]:
    entries = _require(v, Kind.MAP)
    out = {}
    for key, item in entries.items():
        if item.kind is not Kind.STRING:
            raise _Mismatch(f"value for key {key!r} is {item.kind.value}")
        out[key] = item.data
    return out


def _to_value(v: Value) -> Value:
    return v


# (converter, display name) per parameter annotation
_CONVERTERS = {
    str: (_to_str, "String"),
    int: (_to_int, "Int"),
    Unsigned: (_to_unsigned, "Unsigned Int"),
    float: (_to_float, "Float"),
    bool: (_to_bool, "Bool"),
    _STR_MAP: (_to_str_map, "Map of String"),
    Value: (_to_value, "Value"),
}

# (python type check, wrapper) per return annotation
_WRAPPERS = {
    str: (str, Value.of_str),
    int: (int, Value.of_int),
    float: (float, Value.of_float),
    bool: (bool, Value.of_bool),
    _STR_MAP: (dict, Value.of_map),
    Value: (Value, lambda v: v),
}


def _type_key(tp):
    """Normalize an annotation to a converter/wrapper table key."""
    if get_origin(tp) is dict and get_args(tp) == (str, str):
        return _STR_MAP
    return tp


def _type_name(tp) -> str:
    return getattr(tp, "__name__", None) or str(tp)


# ---------------- Decorator ----------------

def builtin(fn: Callable = None, *, name: str = None):
    """
    Adapt an annotated function into a template builtin.

    Can be used bare (`@builtin`) or with an explicit name
    (`@builtin(name="trimAll")`). The adapted callable exposes:
        .arity        number of declared parameters
        .param_types  tuple of parameter annotations
        .builtin_name name used in error messages
        .__wrapped__  the original function
    """

    def _bind(f: Callable) -> Callable[[Sequence[Any]], Value]:
        fname = name or f.__name__
        hints = get_type_hints(f)
        params = list(inspect.signature(f).parameters.values())

        converters = []
        for p in params:
            if p.kind not in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
                raise TypeError(f"{fname}: parameter {p.name!r} must be positional")
            if p.name not in hints:
                raise TypeError(f"{fname}: parameter {p.name!r} has no type annotation")
            key = _type_key(hints[p.name])
            if key not in _CONVERTERS:
                raise TypeError(
                    f"{fname}: unsupported parameter type {_type_name(hints[p.name])} for {p.name!r}"
                )
            conv, tname = _CONVERTERS[key]
            converters.append((p.name, tname, conv))

        if "return" not in hints:
            raise TypeError(f"{fname}: missing return annotation")
        ret_key = _type_key(hints["return"])
        if ret_key not in _WRAPPERS:
            raise TypeError(f"{fname}: unsupported return type {_type_name(hints['return'])}")
        ret_type, wrap = _WRAPPERS[ret_key]
        arity = len(converters)

        def _invoke(args: Sequence[Any]) -> Value:
            if len(args) != arity:
                raise ArityError(fname, arity, len(args))

            converted = []
            for i, (pname, tname, conv) in enumerate(converters):
                arg = args[i]
                if not isinstance(arg, Value):
                    raise DowncastError(fname, i, type(arg))
                try:
                    converted.append(conv(arg))
                except _Mismatch as e:
                    raise ConvertError(fname, i, pname, tname, arg.kind.value, e.reason)

            try:
                result = f(*converted)
            except ValueError as e:
                raise DomainError(fname, str(e)) from e

            # bool is an int subclass; an int-returning builtin must not yield one
            if not isinstance(result, ret_type) or (ret_type is int and isinstance(result, bool)):
                raise TypeError(
                    f"{fname} returned {type(result).__name__}, declared {_type_name(hints['return'])}"
                )
            return wrap(result)

        @wraps(f)
        def adapted(args: Sequence[Any]) -> Value:
            args = tuple(args)
            logger.debug(f"[CALL] {fname} with {len(args)} argument(s)")
            try:
                return _invoke(args)
            except BindError as e:
                logger.debug(f"[BIND] {e.category.value}: {e}", extra={"bind_error": e})
                raise

        adapted.arity = arity
        adapted.param_types = tuple(hints[p.name] for p in params)
        adapted.builtin_name = fname
        return adapted

    if fn is not None:
        return _bind(fn)
    return _bind
