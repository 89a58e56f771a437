"""
Dynamic value semantics: conversion, comparison and member access.
"""

from __future__ import annotations

from .access import MISSING, get_index, get_property, to_output_string
from .compare import compare, contains, equal, is_empty, is_truthy, length, less, sort_key
from .convert import (
    ConversionError,
    Shape,
    convert,
    is_number,
    is_sequence,
    to_liquid,
    to_number,
    to_sequence,
    to_string,
)

__all__ = [
    "ConversionError",
    "Shape",
    "convert",
    "to_liquid",
    "to_string",
    "to_number",
    "to_sequence",
    "is_number",
    "is_sequence",
    "is_truthy",
    "is_empty",
    "length",
    "equal",
    "less",
    "contains",
    "compare",
    "sort_key",
    "MISSING",
    "get_property",
    "get_index",
    "to_output_string",
]
