from typing import Any, Sequence

from tmpl_funcs.fn_logging import get_logger
from tmpl_funcs.lib.errors import UnknownFunctionError
from tmpl_funcs.lib.values import Value
from .string_funcs import STRING_FUNCS

logger = get_logger(__name__)

FUNCTIONS = {}
for group in [
    STRING_FUNCS,
]:
    FUNCTIONS.update(group)

FUNCTION_REGISTRY = {k: v[0] for k, v in FUNCTIONS.items()}
FUNCTION_SIG = {k: v[1] for k, v in FUNCTIONS.items()}


def lookup(name: str):
    """Return the adapted builtin registered under `name`."""
    try:
        return FUNCTION_REGISTRY[name]
    except KeyError:
        raise UnknownFunctionError(name) from None


def call(name: str, args: Sequence[Any]) -> Value:
    """
    Invoke a builtin by name with a sequence of template Values.

    Raises:
        UnknownFunctionError: no builtin is registered as `name`
        BindError: the arguments or the function body were rejected
    """
    fn = lookup(name)
    result = fn(args)
    logger.debug(f"[RESULT] {name} -> {result!r}")
    return result


__all__ = [
    'FUNCTIONS',
    'FUNCTION_REGISTRY',
    'FUNCTION_SIG',
    'lookup',
    'call',
]
