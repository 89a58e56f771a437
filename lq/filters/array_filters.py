"""
Sequence filters and the default filter.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Optional

from ..values import (
    get_property,
    is_empty,
    is_sequence,
    sort_key,
    to_liquid,
    to_sequence,
    to_string,
    equal,
    MISSING,
)


def default(value: Any, default_value: Any = "", allow_false: bool = False) -> Any:
    """
    Replaces nil, false and empty values.

    With allow_false=true a false value is kept.
    """
    value = to_liquid(value)
    if value is False and allow_false:
        return value
    if is_empty(value):
        return default_value
    return value


def compact(value: Any) -> Any:
    """Drops nil items; non-sequences pass through."""
    value = to_liquid(value)
    if not (is_sequence(value) or isinstance(value, Mapping)):
        return value
    return [item for item in to_sequence(value) if item is not None]


def concat(left: List[Any], right: List[Any]) -> List[Any]:
    return left + right


def join(items: List[Any], separator: str = " ") -> str:
    return separator.join(to_string(item) for item in items if item is not None)


def _member(item: Any, key: str) -> Any:
    result = get_property(item, key)
    return None if result is MISSING else result


def map_property(items: List[Any], key: str) -> List[Any]:
    """Picks one property from every item."""
    return [_member(item, key) for item in items]


def reverse(items: List[Any]) -> List[Any]:
    return items[::-1]


def sort(items: List[Any], key: Optional[str] = None) -> List[Any]:
    """
    Sorts case-sensitively, nil first; with a key, by that property.
    """
    if key is None:
        return sorted(items, key=sort_key)
    return sorted(items, key=lambda item: sort_key(_member(item, key)))


def sort_natural(items: List[Any], key: Optional[str] = None) -> List[Any]:
    """Case-insensitive sort."""

    def natural(value: Any):
        value = to_liquid(value)
        return sort_key(value.casefold() if isinstance(value, str) else value)

    if key is None:
        return sorted(items, key=natural)
    return sorted(items, key=lambda item: natural(_member(item, key)))


def first(value: Any) -> Any:
    value = to_liquid(value)
    if isinstance(value, str):
        return value[:1]
    items = to_sequence(value)
    return items[0] if items else None


def last(value: Any) -> Any:
    value = to_liquid(value)
    if isinstance(value, str):
        return value[-1:]
    items = to_sequence(value)
    return items[-1] if items else None


def uniq(items: List[Any]) -> List[Any]:
    """Removes duplicates, keeping the first occurrence."""
    result: List[Any] = []
    for item in items:
        if not any(equal(item, seen) for seen in result):
            result.append(item)
    return result


__all__ = [
    "default",
    "compact",
    "concat",
    "join",
    "map_property",
    "reverse",
    "sort",
    "sort_natural",
    "first",
    "last",
    "uniq",
]
