"""
Truthiness, emptiness and comparison of dynamic values.

Follows Liquid rules rather than Python ones: only None and False are
falsy, booleans never equal numbers, and ordering between unrelated
types is simply false instead of an exception.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .convert import is_number, is_sequence, to_liquid, to_string


def is_truthy(value: Any) -> bool:
    """Only None and False are falsy; 0, "" and [] are truthy."""
    value = to_liquid(value)
    return not (value is None or value is False)


def is_empty(value: Any) -> bool:
    """True for None, False and empty strings, sequences and mappings."""
    value = to_liquid(value)
    if value is None or value is False:
        return True
    if isinstance(value, (str, Mapping)) or is_sequence(value):
        return len(value) == 0
    return False


def length(value: Any) -> int:
    """
    Size of a string, sequence or mapping; 0 for anything else.
    """
    value = to_liquid(value)
    if isinstance(value, (str, Mapping)) or is_sequence(value):
        return len(value)
    return 0


def equal(left: Any, right: Any) -> bool:
    """
    Liquid equality.

    Numbers compare by value across int/float, booleans only equal
    booleans, sequences compare element-wise.
    """
    left = to_liquid(left)
    right = to_liquid(right)

    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if is_number(left) and is_number(right):
        return left == right
    if is_sequence(left) and is_sequence(right):
        if len(left) != len(right):
            return False
        return all(equal(a, b) for a, b in zip(left, right))
    if left is None or right is None:
        return left is right
    try:
        return bool(left == right)
    except TypeError:
        return False


def less(left: Any, right: Any) -> bool:
    """
    Liquid ordering: numbers with numbers, strings with strings.
    Everything else is unordered and yields False.
    """
    left = to_liquid(left)
    right = to_liquid(right)

    if is_number(left) and is_number(right):
        return left < right
    if isinstance(left, str) and isinstance(right, str):
        return left < right
    return False


def contains(container: Any, item: Any) -> bool:
    """
    Substring test for strings, membership for sequences and mapping keys.
    """
    container = to_liquid(container)
    item = to_liquid(item)

    if isinstance(container, str):
        return to_string(item) in container
    if is_sequence(container):
        return any(equal(element, item) for element in container)
    if isinstance(container, Mapping):
        try:
            return item in container
        except TypeError:
            return False
    return False


def compare(operator: str, left: Any, right: Any) -> bool:
    """
    Applies a comparison operator by name.

    Args:
        operator: One of ==, !=, <>, <, <=, >, >=, contains
        left: Left operand
        right: Right operand

    Raises:
        ValueError: For an unknown operator
    """
    if operator == "==":
        return equal(left, right)
    if operator in ("!=", "<>"):
        return not equal(left, right)
    if operator == "<":
        return less(left, right)
    if operator == ">":
        return less(right, left)
    if operator == "<=":
        return less(left, right) or _ordered_equal(left, right)
    if operator == ">=":
        return less(right, left) or _ordered_equal(left, right)
    if operator == "contains":
        return contains(left, right)
    raise ValueError(f"Unknown comparison operator: {operator}")


def _ordered_equal(left: Any, right: Any) -> bool:
    # nil <= nil is false: equality only counts between ordered values
    left = to_liquid(left)
    right = to_liquid(right)
    if (is_number(left) and is_number(right)) or (isinstance(left, str) and isinstance(right, str)):
        return equal(left, right)
    return False


def sort_key(value: Any):
    """
    Key for sorting mixed values: None first, then numbers, then strings,
    then everything else by its string form.
    """
    value = to_liquid(value)
    if value is None:
        return (0, 0, "")
    if is_number(value):
        return (1, value, "")
    if isinstance(value, str):
        return (2, 0, value)
    return (3, 0, to_string(value))


__all__ = [
    "is_truthy",
    "is_empty",
    "length",
    "equal",
    "less",
    "contains",
    "compare",
    "sort_key",
]
