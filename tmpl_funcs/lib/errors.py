"""
Error taxonomy for builtin calls.

Every failure of an adapted builtin is raised as a BindError subclass:

    ArityError          wrong number of arguments
    DowncastError       argument is not a template Value
    ConvertError        Value variant cannot become the declared parameter type
    DomainError         the function body rejected its (well-typed) input
    UnknownFunctionError  no builtin registered under the requested name

The evaluator decides whether to abort rendering or substitute a placeholder.
"""

from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel


class ErrorCategory(str, Enum):
    """Categories reported by BindError.detail()."""

    ARITY = "arity_error"
    DOWNCAST = "downcast_error"
    CONVERT = "convert_error"
    DOMAIN = "domain_error"
    UNKNOWN_FUNCTION = "unknown_function"


class ErrorDetail(BaseModel):
    """Structured form of a BindError, for logging or error pages."""
    message: str
    category: ErrorCategory
    function: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class BindError(Exception):
    category: ErrorCategory

    def __init__(self, function: Optional[str], message: str):
        self.function = function
        prefix = f"{function}: " if function else ""
        super().__init__(f"{prefix}{message}")

    def _details(self) -> Dict[str, Any]:
        return {}

    def detail(self) -> ErrorDetail:
        return ErrorDetail(
            message=str(self),
            category=self.category,
            function=self.function,
            details=self._details() or None,
        )


class ArityError(BindError):
    category = ErrorCategory.ARITY

    def __init__(self, function: Optional[str], expected: int, got: int):
        self.expected = expected
        self.got = got
        plural = "" if expected == 1 else "s"
        super().__init__(function, f"expected {expected} argument{plural}, got {got}")

    def _details(self):
        return {"expected": self.expected, "got": self.got}


class DowncastError(BindError):
    category = ErrorCategory.DOWNCAST

    def __init__(self, function: Optional[str], index: int, actual: type):
        self.index = index
        self.actual = actual
        super().__init__(
            function,
            f"argument {index} is not a template value (got {actual.__name__})",
        )

    def _details(self):
        return {"index": self.index, "actual": self.actual.__name__}


class ConvertError(BindError):
    category = ErrorCategory.CONVERT

    def __init__(self, function: Optional[str], index: int, param: str,
                 expected: str, actual: str, reason: Optional[str] = None):
        self.index = index
        self.param = param
        self.expected = expected
        self.actual = actual
        self.reason = reason
        msg = f"argument {index} ({param}) expects {expected}, got {actual}"
        if reason:
            msg += f": {reason}"
        super().__init__(function, msg)

    def _details(self):
        return {
            "index": self.index,
            "param": self.param,
            "expected": self.expected,
            "actual": self.actual,
        }


class DomainError(BindError):
    """The builtin itself failed; `message` is its error text, unmodified."""

    category = ErrorCategory.DOMAIN

    def __init__(self, function: Optional[str], message: str):
        self.message = message
        super().__init__(function, message)


class UnknownFunctionError(BindError):
    category = ErrorCategory.UNKNOWN_FUNCTION

    def __init__(self, name: str):
        self.name = name
        super().__init__(None, f"unknown function {name!r}")

    def _details(self):
        return {"name": self.name}
