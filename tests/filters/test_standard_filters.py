"""
Tests for the standard filter catalog, evaluated through expressions.
"""

import math
from collections import OrderedDict

import pytest

from lq.expressions import ExpressionConfig, ExpressionContext, FilterError, evaluate_expression_string
from lq.filters import add_standard_filters
from lq.values import ConversionError


@pytest.fixture
def filter_bindings(bindings):
    m1, m2, m3 = {"name": "m1"}, {"name": "m2"}, {"name": "m3"}
    return {
        **bindings,
        "map": {"a": 1},
        "dup_maps": [m1, m2, m1, m3],
        "mixed_case_hash_values": [{"key": "c"}, {"key": "a"}, {"key": "B"}],
        "map_ordered": OrderedDict([(1, "b"), (2, "a")]),
        "map_ordered_dup": OrderedDict([(1, "a"), (2, "a"), (3, "b")]),
        "map_ordered_nil": OrderedDict([(1, "a"), (2, None), (3, "b")]),
        "map_ordered_objs": OrderedDict([(1, {"key": "a"}), (2, {"key": "b"})]),
    }


@pytest.fixture
def evaluate(filter_bindings):
    config = ExpressionConfig()
    add_standard_filters(config)
    context = ExpressionContext(bindings=filter_bindings, config=config)

    def _evaluate(text):
        return evaluate_expression_string(text, context)

    return _evaluate


def check(evaluate, text, expected):
    actual = evaluate(text)
    if isinstance(expected, float) and not math.isinf(expected):
        assert actual == pytest.approx(expected), text
        assert isinstance(actual, float), text
    else:
        assert actual == expected, text
        assert type(actual) is type(expected), text


class TestValueFilters:

    @pytest.mark.parametrize("text,expected", [
        ("undefined | default: 2.99", 2.99),
        ("nil | default: 2.99", 2.99),
        ("false | default: 2.99", 2.99),
        ('"" | default: 2.99', 2.99),
        ("empty_list | default: 2.99", 2.99),
        ("empty_map | default: 2.99", 2.99),
        ("true | default: 2.99", True),
        ('"true" | default: 2.99', "true"),
        ("4.99 | default: 2.99", 4.99),
        ("0 | default: 2.99", 0),
        ("fruits | default: 2.99 | join", "apples oranges peaches plums"),
        ("false | default: 2.99, allow_false: true", False),
        ("nil | default: 2.99, allow_false: true", 2.99),
    ])
    def test_default(self, evaluate, text, expected):
        check(evaluate, text, expected)


class TestArrayFilters:

    @pytest.mark.parametrize("text,expected", [
        ("pages | map: 'category' | join", "business celebrities lifestyle sports technology"),
        ("pages | map: 'category' | compact | join", "business celebrities lifestyle sports technology"),
        ('"John, Paul, George, Ringo" | split: ", " | join: " and "', "John and Paul and George and Ringo"),
        ('",John, Paul, George, Ringo" | split: ", " | join: " and "', ",John and Paul and George and Ringo"),
        ('"John, Paul, George, Ringo," | split: ", " | join: " and "', "John and Paul and George and Ringo,"),
        ('animals | sort | join: ", "', "Sally Snake, giraffe, octopus, zebra"),
        ('sort_prop | sort: "weight" | inspect', '[{"weight":null},{"weight":1},{"weight":3},{"weight":5}]'),
        ('fruits | reverse | join: ", "', "plums, peaches, oranges, apples"),
        ("fruits | first", "apples"),
        ("fruits | last", "plums"),
        ("empty_list | first", None),
        ("empty_list | last", None),
        ("empty_list | sort: 'a'", []),
        ("dup_ints | uniq | join", "1 2 3"),
        ("dup_strings | uniq | join", "one two three"),
        ('dup_maps | uniq | map: "name" | join', "m1 m2 m3"),
        ("mixed_case | sort_natural | join", "a B c"),
        ("mixed_case_hash_values | sort_natural: 'key' | map: 'key' | join", "a B c"),
        ("12 | compact", 12),
        ("dup_ints | concat: dup_strings | join", "1 2 1 3 one two one three"),
        ("dup_ints | concat: empty_list | join", "1 2 1 3"),
        ("empty_list | concat: empty_list | join", ""),
        ('"Ground control to Major Tom." | size', 28),
        ('"apples, oranges, peaches, plums" | split: ", " | size', 4),
        ("map | size", 1),
        ("12 | size", 0),
        ("'abc' | first", "a"),
    ])
    def test_sequences(self, evaluate, text, expected):
        check(evaluate, text, expected)

    @pytest.mark.parametrize("text,expected", [
        ("map_ordered_nil | compact | join", "a b"),
        ("map_ordered | first", "b"),
        ("map_ordered | last", "a"),
        ("map_ordered | join", "b a"),
        ('map_ordered_objs | map: "key" | join', "a b"),
        ("map_ordered | reverse | join", "a b"),
        ("map_ordered | sort | join", "a b"),
        ("map_ordered_dup | join", "a a b"),
        ("map_ordered_dup | uniq | join", "a b"),
    ])
    def test_mappings_act_as_value_lists(self, evaluate, text, expected):
        check(evaluate, text, expected)

    def test_join_rejects_string(self, evaluate):
        with pytest.raises(ConversionError, match="can't convert str"):
            evaluate("'abc' | join")


class TestStringFilters:

    @pytest.mark.parametrize("text,expected", [
        ('"Take my protein pills and put my helmet on" | replace: "my", "your"',
         "Take your protein pills and put your helmet on"),
        ('"Take my protein pills and put my helmet on" | replace_first: "my", "your"',
         "Take your protein pills and put my helmet on"),
        ('"/my/fancy/url" | append: ".html"', "/my/fancy/url.html"),
        ('"website.com" | append: "/index.html"', "website.com/index.html"),
        ('"title" | capitalize', "Title"),
        ('"my great title" | capitalize', "My great title"),
        ('"" | capitalize', ""),
        ('"Parker Moore" | downcase', "parker moore"),
        ('"Have you read \'James & the Giant Peach\'?" | escape',
         "Have you read &#39;James &amp; the Giant Peach&#39;?"),
        ('"1 < 2 & 3" | escape_once', "1 &lt; 2 &amp; 3"),
        ('"1 &lt; 2 &amp; 3" | escape_once', "1 &lt; 2 &amp; 3"),
        ("string_with_newlines | newline_to_br", "<br />Hello<br />there<br />"),
        ('"apples, oranges, and bananas" | prepend: "Some fruit: "', "Some fruit: apples, oranges, and bananas"),
        ('"I strained to see the train through the rain" | remove: "rain"', "I sted to see the t through the "),
        ('"I strained to see the train through the rain" | remove_first: "rain"',
         "I sted to see the train through the rain"),
        ('"Have <em>you</em> read <strong>Ulysses</strong>?" | strip_html', "Have you read Ulysses?"),
        ("string_with_newlines | strip_newlines", "Hellothere"),
        ('"Parker Moore" | upcase', "PARKER MOORE"),
        ('"          So much room for activities!          " | strip', "So much room for activities!"),
        ('"          So much room for activities!          " | lstrip', "So much room for activities!          "),
        ('"          So much room for activities!          " | rstrip', "          So much room for activities!"),
        ('"%27Stop%21%27+said+Fred" | url_decode', "'Stop!' said Fred"),
        ('"john@liquid.com" | url_encode', "john%40liquid.com"),
        ('"Tetsuro Takara" | url_encode', "Tetsuro+Takara"),
        ("map | inspect", '{"a":1}'),
        ("1 | type", "int"),
        ('"1" | type', "str"),
    ])
    def test_strings(self, evaluate, text, expected):
        check(evaluate, text, expected)

    @pytest.mark.parametrize("text,expected", [
        ('"Liquid" | slice: 0', "L"),
        ('"Liquid" | slice: 2', "q"),
        ('"Liquid" | slice: 2, 5', "quid"),
        ('"Liquid" | slice: -3, 2', "ui"),
        ("fruits | slice: 1, 2 | join", "oranges peaches"),
    ])
    def test_slice(self, evaluate, text, expected):
        check(evaluate, text, expected)

    @pytest.mark.parametrize("source,separator,expected", [
        ("a/b/c", "/", "a-b-c"),
        ("a/b/", "/", "a-b"),
        ("a//c", "/", "a--c"),
        ("a//", "/", "a"),
        ("/b/c", "/", "-b-c"),
        ("/b/", "/", "-b"),
        ("//c", "/", "--c"),
        ("//", "/", ""),
        ("/", "/", ""),
        ("a.b", ".", "a-b"),
        ("a..b", ".", "a--b"),
        ("a.\t.b", ".", "a-\t-b"),
        ("a b", " ", "a-b"),
        ("a  b", " ", "a-b"),
        ("a \t b", " ", "a-b"),
        ("abc", "", "a-b-c"),
    ])
    def test_split(self, evaluate, source, separator, expected):
        check(evaluate, f"'{source}' | split: '{separator}' | join: '-'", expected)

    @pytest.mark.parametrize("text,expected", [
        ('"Ground control to Major Tom." | truncate: 20', "Ground control to..."),
        ('"Ground control to Major Tom." | truncate: 25, ", and so on"', "Ground control, and so on"),
        ('"Ground control to Major Tom." | truncate: 20, ""', "Ground control to Ma"),
        ('"Ground" | truncate: 20', "Ground"),
        ('"Ground control to Major Tom." | truncatewords: 3', "Ground control to..."),
        ('"Ground control to Major Tom." | truncatewords: 3, "--"', "Ground control to--"),
        ('"Ground control to Major Tom." | truncatewords: 3, ""', "Ground control to"),
        ('"Ground control" | truncatewords: 3, ""', "Ground control"),
        ('"Ground" | truncatewords: 3, ""', "Ground"),
        ('"  Ground" | truncatewords: 3, ""', "  Ground"),
        ('"" | truncatewords: 3, ""', ""),
        ('"  " | truncatewords: 3, ""', "  "),
    ])
    def test_truncation(self, evaluate, text, expected):
        check(evaluate, text, expected)


class TestNumberFilters:

    @pytest.mark.parametrize("text,expected", [
        ("-17 | abs", 17),
        ("4 | abs", 4),
        ('"-19.86" | abs', 19.86),
        ("1.2 | ceil", 2),
        ("2.0 | ceil", 2),
        ("183.357 | ceil", 184),
        ('"183.357" | ceil', 184),
        ('"3.5" | ceil', 4),
        ("1.2 | floor", 1),
        ("2.0 | floor", 2),
        ("183.357 | floor", 183),
        ("4 | plus: 2", 6),
        ('"4" | plus: 2', 6),
        ('"183.357" | plus: "12"', 195.357),
        ("4 | minus: 2", 2),
        ("16 | minus: 4", 12),
        ('"16" | minus: 4', 12),
        ("183.357 | minus: 12", 171.357),
        ('"183.357" | minus: 12', 171.357),
        ("3 | times: 2", 6),
        ("24 | times: 7", 168),
        ('"24" | times: 7', 168),
        ("183.357 | times: 12", 2200.284),
        ('"183.357" | times: 12', 2200.284),
        ("3 | modulo: 2", 1),
        ("24 | modulo: 7", 3),
        ('"24" | modulo: 7', 3),
        ("183.357 | modulo: 12", 3.357),
        ("-7 | modulo: 3", -1),
        ("16 | divided_by: 4", 4),
        ("5 | divided_by: 3", 1),
        ("20 | divided_by: 7", 2),
        ('"20" | divided_by: 7', 2),
        ("-7 | divided_by: 2", -3),
        ("20 | divided_by: 7.0", 2.857142857142857),
        ('"20" | divided_by: 7.0', 2.857142857142857),
        ('"20" | divided_by: 0.0', math.inf),
        ("1.2 | round", 1),
        ("2.7 | round", 3),
        ('"2.7" | round', 3),
        ("183.357 | round: 2", 183.36),
        ('"183.357" | round: 2', 183.36),
        ("4 | at_least: 5", 5),
        ("4 | at_least: 3", 4),
        ("3.14 | at_least: 2", 3.14),
        ("3.14 | at_least: 5", 5),
        ("4 | at_most: 5", 4),
        ("4 | at_most: 3", 3),
        ("3.14 | at_most: 2", 2),
        ("3.14 | at_most: 5", 3.14),
    ])
    def test_numbers(self, evaluate, text, expected):
        check(evaluate, text, expected)

    def test_integer_division_by_zero(self, evaluate):
        with pytest.raises(FilterError) as exc:
            evaluate("20 | divided_by: 0")

        assert isinstance(exc.value.cause, ZeroDivisionError)
        assert "divided_by" in str(exc.value)

    def test_non_numeric_divisor_counts_as_zero(self, evaluate):
        with pytest.raises(FilterError):
            evaluate("20 | divided_by: 's'")
