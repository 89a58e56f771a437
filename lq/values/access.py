"""
Property and index access on dynamic values.

Lookups never raise for a missing member: they return the MISSING sentinel
and leave the decision (None in lax mode, an error in strict mode) to the
expression evaluator.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .convert import is_sequence, to_liquid, to_string


class _Missing:
    """Marker for a member that does not exist."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def get_property(value: Any, name: str) -> Any:
    """
    Resolves value.name.

    Mapping keys win over the size/first/last pseudo-properties, so a
    mapping with a "size" key returns that key's value. Plain objects
    expose their public, non-callable attributes.

    Args:
        value: Container value
        name: Property name

    Returns:
        Property value or MISSING
    """
    value = to_liquid(value)
    if value is None:
        return MISSING

    if isinstance(value, Mapping):
        if name in value:
            return value[name]
        if name == "size":
            return len(value)
        return MISSING

    if is_sequence(value) or isinstance(value, str):
        if name == "size":
            return len(value)
        if name == "first":
            return value[0] if len(value) else None
        if name == "last":
            return value[-1] if len(value) else None
        return MISSING

    if name.startswith("_"):
        return MISSING
    attr = getattr(value, name, MISSING)
    if attr is MISSING or callable(attr):
        return MISSING
    return attr


def get_index(value: Any, key: Any) -> Any:
    """
    Resolves value[key].

    Integer keys index sequences, negative ones from the end; string
    keys on non-mappings fall back to get_property.

    Returns:
        Item value or MISSING
    """
    value = to_liquid(value)
    key = to_liquid(key)
    if value is None:
        return MISSING

    if isinstance(value, Mapping):
        try:
            if key in value:
                return value[key]
        except TypeError:
            return MISSING
        return MISSING

    if is_sequence(value) and isinstance(key, int) and not isinstance(key, bool):
        if -len(value) <= key < len(value):
            return value[key]
        return MISSING

    if isinstance(key, str):
        return get_property(value, key)

    return MISSING


def to_output_string(value: Any) -> str:
    """
    Text written for {{ value }}.

    None renders as nothing, booleans as true/false, sequences as the
    concatenation of their items.
    """
    return to_string(value)


__all__ = ["MISSING", "get_property", "get_index", "to_output_string"]
