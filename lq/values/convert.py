"""
Conversion of dynamic values to the shapes filters and tags expect.

Template bindings are arbitrary Python objects: mappings (including
ruamel.yaml's ordered CommentedMap), sequences, numbers, strings, objects
exposing to_liquid(). Filters declare the shape of each parameter and get
converted values; a value that cannot take the requested shape raises
ConversionError.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Set
from numbers import Integral, Real
from typing import Any, List

from ..errors import LQError


class ConversionError(LQError):
    """A value cannot be converted to the requested shape."""

    def __init__(self, value: Any, shape: Shape, modifier: str = ""):
        prefix = f"{modifier} " if modifier else ""
        super().__init__(f"can't convert {prefix}{type(value).__name__}({value!r}) to {shape.value}")
        self.value = value
        self.shape = shape


class Shape(enum.Enum):
    """Target shapes for conversion."""
    ANY = "any"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    NUMBER = "number"          # int or float, whichever the value parses as
    BOOLEAN = "boolean"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def to_liquid(value: Any) -> Any:
    """
    Unwraps objects that define their template representation.

    An object with a callable to_liquid() attribute is replaced by
    its result; everything else is returned as is.
    """
    if isinstance(value, (str, int, float, Mapping, list, tuple, range)) or value is None:
        return value
    method = getattr(value, "to_liquid", None)
    if callable(method):
        return method()
    return value


def is_number(value: Any) -> bool:
    """True for ints and floats, but not for bools."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """True for list-like values; strings and mappings are not sequences."""
    return isinstance(value, (list, tuple, range))


def to_string(value: Any) -> str:
    """
    String form used for output and STRING parameters.

    None renders as empty, booleans in lower case, sequences as the
    concatenation of their items.
    """
    value = to_liquid(value)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    if is_sequence(value):
        return "".join(to_string(item) for item in value)
    return str(value)


def to_sequence(value: Any) -> List[Any]:
    """
    List form used for SEQUENCE parameters.

    Raises:
        ConversionError: For scalars and strings
    """
    value = to_liquid(value)
    if value is None:
        return []
    if is_sequence(value):
        return list(value)
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, Set):
        return list(value)
    raise ConversionError(value, Shape.SEQUENCE)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ConversionError(value, Shape.INTEGER) from None
    raise ConversionError(value, Shape.INTEGER)


def _to_float(value: Any) -> float:
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ConversionError(value, Shape.FLOAT) from None
    raise ConversionError(value, Shape.FLOAT)


def to_number(value: Any) -> Any:
    """
    Numeric form used for NUMBER parameters.

    Integers stay integers; strings become an int when they parse as
    one, else a float. Anything unparseable counts as 0.
    """
    value = to_liquid(value)
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        for parse in (int, float):
            try:
                return parse(text)
            except ValueError:
                continue
    return 0


def convert(value: Any, shape: Shape) -> Any:
    """
    Converts a value to the requested shape.

    Args:
        value: Arbitrary dynamic value
        shape: Target shape

    Returns:
        Converted value

    Raises:
        ConversionError: If the value cannot take the shape
    """
    if shape is Shape.ANY:
        return to_liquid(value)
    if shape is Shape.BOOLEAN:
        value = to_liquid(value)
        return not (value is None or value is False)
    if shape is Shape.STRING:
        return to_string(value)
    if shape is Shape.NUMBER:
        return to_number(value)

    value = to_liquid(value)
    if shape is Shape.INTEGER:
        return _to_int(value)
    if shape is Shape.FLOAT:
        return _to_float(value)
    if shape is Shape.SEQUENCE:
        return to_sequence(value)
    if shape is Shape.MAPPING:
        if isinstance(value, Mapping):
            return dict(value)
        raise ConversionError(value, shape)

    raise ValueError(f"Unknown shape: {shape}")


__all__ = [
    "ConversionError",
    "Shape",
    "convert",
    "to_liquid",
    "to_string",
    "to_sequence",
    "to_number",
    "is_number",
    "is_sequence",
]
