"""
Tests for dynamic value conversion, comparison and access.
"""

from collections import OrderedDict

import pytest

from lq.values import (
    MISSING,
    ConversionError,
    Shape,
    compare,
    convert,
    get_index,
    get_property,
    is_empty,
    is_truthy,
    length,
    sort_key,
    to_number,
    to_string,
)


class Drop:
    def __init__(self, value):
        self.value = value

    def to_liquid(self):
        return self.value


class TestConvert:

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (True, "true"),
        (False, "false"),
        (12, "12"),
        (1.5, "1.5"),
        (["a", 1, None, ["b"]], "a1b"),
        (Drop("x"), "x"),
    ])
    def test_to_string(self, value, expected):
        assert to_string(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (None, 0),
        ("12", 12),
        (" 3.5 ", 3.5),
        ("abc", 0),
        (True, 1),
        (7.0, 7.0),
    ])
    def test_to_number(self, value, expected):
        result = to_number(value)
        assert result == expected
        assert type(result) is type(expected)

    def test_integer_shape(self):
        assert convert("42", Shape.INTEGER) == 42
        assert convert(3.9, Shape.INTEGER) == 3

    def test_integer_shape_rejects_text(self):
        with pytest.raises(ConversionError) as exc:
            convert("x", Shape.INTEGER)

        assert str(exc.value) == "can't convert str('x') to integer"

    def test_float_shape(self):
        assert convert("2", Shape.FLOAT) == 2.0
        with pytest.raises(ConversionError):
            convert([1], Shape.FLOAT)

    def test_sequence_shape(self):
        assert convert((1, 2), Shape.SEQUENCE) == [1, 2]
        assert convert(None, Shape.SEQUENCE) == []
        assert convert(OrderedDict(a=1, b=2), Shape.SEQUENCE) == [1, 2]
        with pytest.raises(ConversionError):
            convert("abc", Shape.SEQUENCE)

    def test_mapping_shape(self):
        assert convert(OrderedDict(a=1), Shape.MAPPING) == {"a": 1}
        with pytest.raises(ConversionError):
            convert([], Shape.MAPPING)

    def test_boolean_and_any(self):
        assert convert(0, Shape.BOOLEAN) is True
        assert convert(None, Shape.BOOLEAN) is False
        assert convert(Drop([1]), Shape.ANY) == [1]


class TestCompare:

    @pytest.mark.parametrize("value,expected", [
        (None, False),
        (False, False),
        (0, True),
        ("", True),
        ([], True),
        (Drop(None), False),
    ])
    def test_truthiness(self, value, expected):
        assert is_truthy(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (None, True),
        ("", True),
        ([], True),
        ({}, True),
        (0, False),
        ("a", False),
        ([0], False),
    ])
    def test_emptiness(self, value, expected):
        assert is_empty(value) is expected

    def test_length(self):
        assert length("abc") == 3
        assert length({"a": 1}) == 1
        assert length(5) == 0

    @pytest.mark.parametrize("op,left,right,expected", [
        ("==", 1, 1.0, True),
        ("==", True, 1, False),
        ("==", [1, "a"], [1.0, "a"], True),
        ("==", [1], [1, 2], False),
        ("!=", "a", "b", True),
        ("<", "a", "b", True),
        ("<", 1, "2", False),
        (">=", 2, 2, True),
        ("contains", {"k": 1}, "k", True),
        ("contains", "abc", 1, False),
        ("contains", 5, 5, False),
    ])
    def test_compare(self, op, left, right, expected):
        assert compare(op, left, right) is expected

    def test_unknown_operator(self):
        with pytest.raises(ValueError):
            compare("=~", 1, 1)

    def test_sort_key_orders_mixed_values(self):
        values = ["b", 3, None, 1.5, "a"]
        assert sorted(values, key=sort_key) == [None, 1.5, 3, "a", "b"]


class TestAccess:

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert get_property({}, "x") is MISSING

    def test_property_on_none(self):
        assert get_property(None, "x") is MISSING

    def test_first_last_of_empty(self):
        assert get_property([], "first") is None
        assert get_property([], "last") is None

    def test_index_bounds(self):
        assert get_index([1, 2], 2) is MISSING
        assert get_index([1, 2], -3) is MISSING
        assert get_index([1, 2], True) is MISSING

    def test_string_key_on_sequence(self):
        assert get_index([1, 2], "size") == 2

    def test_unhashable_key(self):
        assert get_index({"a": 1}, ["a"]) is MISSING
