"""
Arithmetic filters.

Operands arrive as int or float (Shape.NUMBER). Integer operands give
integer results; a float on either side makes the result a float.
"""

from __future__ import annotations

import math
from typing import Callable, Union

Number = Union[int, float]


def _arithmetic(int_op: Callable[[int, int], int], float_op: Callable[[float, float], float]):
    def apply(left: Number, right: Number) -> Number:
        if isinstance(left, float) or isinstance(right, float):
            return float_op(float(left), float(right))
        return int_op(left, right)
    return apply


plus = _arithmetic(lambda a, b: a + b, lambda a, b: a + b)
minus = _arithmetic(lambda a, b: a - b, lambda a, b: a - b)
times = _arithmetic(lambda a, b: a * b, lambda a, b: a * b)


def modulo(left: Number, right: Number) -> Number:
    """Remainder with the sign of the dividend."""
    result = math.fmod(left, right)
    if isinstance(left, float) or isinstance(right, float):
        return result
    return int(result)


def divided_by(left: float, right: Number) -> Number:
    """
    Integer divisor: truncating integer division. Float divisor: float
    division, where dividing by 0.0 gives an infinity.

    Raises:
        ZeroDivisionError: For an integer divisor of 0
    """
    if isinstance(right, float):
        if right == 0.0:
            if left == 0.0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right
    if right == 0:
        raise ZeroDivisionError("divided by 0")
    quotient = abs(int(left)) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def absolute(value: Number) -> Number:
    return abs(value)


def ceil(value: Number) -> int:
    return int(math.ceil(value))


def floor(value: Number) -> int:
    return int(math.floor(value))


def round_number(value: Number, places: int = 0) -> Number:
    """Rounds half up; keeps a float only for a float value with places > 0."""
    scale = 10 ** places
    result = math.floor(value * scale + 0.5) / scale
    if isinstance(value, float) and places > 0:
        return result
    return int(result)


def at_least(value: Number, minimum: Number) -> Number:
    return value if value > minimum else minimum


def at_most(value: Number, maximum: Number) -> Number:
    return value if value < maximum else maximum


__all__ = [
    "plus",
    "minus",
    "times",
    "modulo",
    "divided_by",
    "absolute",
    "ceil",
    "floor",
    "round_number",
    "at_least",
    "at_most",
]
