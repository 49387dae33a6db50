"""
String builtins for a dynamically typed template engine.

    from tmpl_funcs import Value, call
    call("abbrev", [Value.of_int(5), Value.of_str("hello world")])
"""

from tmpl_funcs.lib.builtins.registry import FUNCTION_REGISTRY, FUNCTION_SIG, call, lookup
from tmpl_funcs.lib.errors import (
    ArityError,
    BindError,
    ConvertError,
    DomainError,
    DowncastError,
    ErrorCategory,
    UnknownFunctionError,
)
from tmpl_funcs.lib.runtime.binding import Unsigned, builtin
from tmpl_funcs.lib.values import Kind, Value

__version__ = "0.1.0"

__all__ = [
    "FUNCTION_REGISTRY",
    "FUNCTION_SIG",
    "call",
    "lookup",
    "builtin",
    "Unsigned",
    "Kind",
    "Value",
    "ErrorCategory",
    "BindError",
    "ArityError",
    "DowncastError",
    "ConvertError",
    "DomainError",
    "UnknownFunctionError",
]
