"""
Errors raised while parsing and evaluating expressions.
"""

from __future__ import annotations

from ..errors import LQError


class ExpressionSyntaxError(LQError):
    """Expression or statement text does not match the grammar."""

    def __init__(self, message: str, position: int = 0):
        self.message = message
        self.position = position
        super().__init__(f"syntax error at position {position}: {message}")


class EvaluationError(LQError):
    """Failure while evaluating an expression tree."""
    pass


class UndefinedVariableError(EvaluationError):
    """Strict mode: a variable or property path does not resolve."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'undefined variable "{name}"')


class UndefinedFilterError(EvaluationError):
    """Strict mode: a filter name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'undefined filter "{name}"')


class FilterArgumentError(EvaluationError):
    """A filter was called with arguments its function cannot accept."""

    def __init__(self, name: str, detail: str):
        self.name = name
        super().__init__(f'wrong arguments for filter "{name}": {detail}')


class FilterError(EvaluationError):
    """A filter function raised an unexpected exception."""

    def __init__(self, name: str, cause: BaseException):
        self.name = name
        self.cause = cause
        super().__init__(f'error in filter "{name}": {cause}')


__all__ = [
    "ExpressionSyntaxError",
    "EvaluationError",
    "UndefinedVariableError",
    "UndefinedFilterError",
    "FilterArgumentError",
    "FilterError",
]
