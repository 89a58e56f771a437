"""
Standard filter catalog.
"""

from __future__ import annotations

from ..expressions.config import ExpressionConfig
from ..values import Shape, length
from . import array_filters as arrays
from . import number_filters as numbers
from . import string_filters as strings

S = Shape


def add_standard_filters(config: ExpressionConfig) -> None:
    """
    Registers the standard filters.

    Shapes describe the piped value followed by the positional
    arguments; optional trailing arguments fall back to the function
    defaults when omitted.
    """
    # value
    config.add_filter("default", arrays.default, S.ANY, S.ANY)

    # sequences
    config.add_filter("compact", arrays.compact, S.ANY)
    config.add_filter("concat", arrays.concat, S.SEQUENCE, S.SEQUENCE)
    config.add_filter("join", arrays.join, S.SEQUENCE, S.STRING)
    config.add_filter("map", arrays.map_property, S.SEQUENCE, S.STRING)
    config.add_filter("reverse", arrays.reverse, S.SEQUENCE)
    config.add_filter("sort", arrays.sort, S.SEQUENCE, S.STRING)
    config.add_filter("sort_natural", arrays.sort_natural, S.SEQUENCE, S.STRING)
    config.add_filter("first", arrays.first, S.ANY)
    config.add_filter("last", arrays.last, S.ANY)
    config.add_filter("uniq", arrays.uniq, S.SEQUENCE)
    config.add_filter("size", length, S.ANY)

    # numbers
    config.add_filter("abs", numbers.absolute, S.NUMBER)
    config.add_filter("ceil", numbers.ceil, S.NUMBER)
    config.add_filter("floor", numbers.floor, S.NUMBER)
    config.add_filter("at_least", numbers.at_least, S.NUMBER, S.NUMBER)
    config.add_filter("at_most", numbers.at_most, S.NUMBER, S.NUMBER)
    config.add_filter("plus", numbers.plus, S.NUMBER, S.NUMBER)
    config.add_filter("minus", numbers.minus, S.NUMBER, S.NUMBER)
    config.add_filter("times", numbers.times, S.NUMBER, S.NUMBER)
    config.add_filter("divided_by", numbers.divided_by, S.FLOAT, S.NUMBER)
    config.add_filter("modulo", numbers.modulo, S.NUMBER, S.NUMBER)
    config.add_filter("round", numbers.round_number, S.NUMBER, S.INTEGER)

    # strings
    config.add_filter("append", strings.append, S.STRING, S.STRING)
    config.add_filter("prepend", strings.prepend, S.STRING, S.STRING)
    config.add_filter("capitalize", strings.capitalize, S.STRING)
    config.add_filter("downcase", strings.downcase, S.STRING)
    config.add_filter("upcase", strings.upcase, S.STRING)
    config.add_filter("escape", strings.escape, S.STRING)
    config.add_filter("escape_once", strings.escape_once, S.STRING)
    config.add_filter("newline_to_br", strings.newline_to_br, S.STRING)
    config.add_filter("remove", strings.remove, S.STRING, S.STRING)
    config.add_filter("remove_first", strings.remove_first, S.STRING, S.STRING)
    config.add_filter("replace", strings.replace, S.STRING, S.STRING, S.STRING)
    config.add_filter("replace_first", strings.replace_first, S.STRING, S.STRING, S.STRING)
    config.add_filter("slice", strings.slice_value, S.ANY, S.INTEGER, S.INTEGER)
    config.add_filter("split", strings.split, S.STRING, S.STRING)
    config.add_filter("strip", strings.strip, S.STRING)
    config.add_filter("lstrip", strings.lstrip, S.STRING)
    config.add_filter("rstrip", strings.rstrip, S.STRING)
    config.add_filter("strip_html", strings.strip_html, S.STRING)
    config.add_filter("strip_newlines", strings.strip_newlines, S.STRING)
    config.add_filter("truncate", strings.truncate, S.STRING, S.INTEGER, S.STRING)
    config.add_filter("truncatewords", strings.truncatewords, S.STRING, S.INTEGER, S.STRING)
    config.add_filter("url_encode", strings.url_encode, S.STRING)
    config.add_filter("url_decode", strings.url_decode, S.STRING)

    # debugging
    config.add_filter("inspect", strings.inspect_value, S.ANY)
    config.add_filter("type", strings.type_name, S.ANY)


__all__ = ["add_standard_filters"]
