"""
Tests for the expression lexer.
"""

import pytest

from lq.expressions.errors import ExpressionSyntaxError
from lq.expressions.lexer import ExpressionLexer


@pytest.fixture
def lexer():
    return ExpressionLexer()


def types_and_values(tokens):
    return [(t.type, t.value) for t in tokens]


class TestExpressionLexer:

    def test_variable_with_filter(self, lexer):
        tokens = lexer.tokenize("page.title | truncate: 10")

        assert types_and_values(tokens) == [
            ('IDENTIFIER', 'page'),
            ('SYMBOL', '.'),
            ('IDENTIFIER', 'title'),
            ('SYMBOL', '|'),
            ('IDENTIFIER', 'truncate'),
            ('SYMBOL', ':'),
            ('INT', '10'),
            ('EOF', ''),
        ]

    def test_strings_lose_quotes(self, lexer):
        tokens = lexer.tokenize("'single' \"double\" ''")

        assert types_and_values(tokens)[:3] == [
            ('STRING', 'single'),
            ('STRING', 'double'),
            ('STRING', ''),
        ]

    def test_quotes_of_other_kind_inside_string(self, lexer):
        tokens = lexer.tokenize("\"it's\"")
        assert tokens[0].value == "it's"

    @pytest.mark.parametrize("text,expected", [
        ("1", ('INT', '1')),
        ("-7", ('INT', '-7')),
        ("2.5", ('FLOAT', '2.5')),
        ("-0.25", ('FLOAT', '-0.25')),
    ])
    def test_numbers(self, lexer, text, expected):
        assert types_and_values(lexer.tokenize(text))[0] == expected

    def test_range_is_not_a_float(self, lexer):
        tokens = lexer.tokenize("(1..5)")

        assert types_and_values(tokens) == [
            ('SYMBOL', '('),
            ('INT', '1'),
            ('SYMBOL', '..'),
            ('INT', '5'),
            ('SYMBOL', ')'),
            ('EOF', ''),
        ]

    @pytest.mark.parametrize("op", ["==", "!=", "<>", "<=", ">=", "<", ">"])
    def test_operators(self, lexer, op):
        tokens = lexer.tokenize(f"a {op} b")
        assert tokens[1].type == 'OPERATOR'
        assert tokens[1].value == op

    @pytest.mark.parametrize("word", ["and", "or", "contains", "in", "reversed", "true", "false", "nil", "null"])
    def test_keywords(self, lexer, word):
        assert lexer.tokenize(word)[0].type == 'KEYWORD'

    def test_identifiers_allow_dash_and_question_mark(self, lexer):
        tokens = lexer.tokenize("my-var empty? _private")

        assert [t.value for t in tokens[:3]] == ["my-var", "empty?", "_private"]
        assert all(t.type == 'IDENTIFIER' for t in tokens[:3])

    def test_keyword_prefix_is_identifier(self, lexer):
        assert lexer.tokenize("order")[0].type == 'IDENTIFIER'
        assert lexer.tokenize("truely")[0].type == 'IDENTIFIER'

    def test_positions(self, lexer):
        tokens = lexer.tokenize("a  | b")
        assert [t.position for t in tokens] == [0, 3, 5, 6]

    def test_unknown_character(self, lexer):
        with pytest.raises(ExpressionSyntaxError) as exc:
            lexer.tokenize("a & b")

        assert exc.value.position == 2
        assert "unexpected character '&'" in str(exc.value)

    def test_unterminated_string(self, lexer):
        with pytest.raises(ExpressionSyntaxError):
            lexer.tokenize("'open")
