"""
Recursive-descent parser for expressions and tag statements.

Builds an expression tree from the token list produced by ExpressionLexer.

Grammar:
expression  → logical EOF
logical     → comparison (("and" | "or") logical)?
comparison  → filtered (cmp_op filtered)*
cmp_op      → "==" | "!=" | "<>" | "<" | "<=" | ">" | ">=" | "contains"
filtered    → primary ("|" IDENT (":" filter_args)?)*
filter_args → filter_arg ("," filter_arg)*
filter_arg  → IDENT ":" primary | primary
primary     → (literal | path | "(" logical ")" | "(" primary ".." primary ")") accessor*
path        → IDENT accessor*
accessor    → "." (IDENT | KEYWORD | INT) | "[" logical "]"
literal     → INT | FLOAT | STRING | "true" | "false" | "nil" | "null"

and/or share one precedence level and group to the right, so
"a or b and c" reads as "a or (b and c)" and "a and b or c" as
"a and (b or c)".

Statements:
assign → IDENT "=" logical
loop   → IDENT "in" primary ("reversed" | ("limit" | "offset" | "cols") ":" primary)*
cycle  → [primary ":"] primary ("," primary)*
when   → primary (("," | "or") primary)*
"""

from __future__ import annotations

import enum
from typing import Callable, Dict, List, Optional, Tuple

from .errors import ExpressionSyntaxError
from .lexer import ExpressionLexer, Token
from .model import (
    Assignment,
    ComparisonExpr,
    Cycle,
    Expression,
    ExpressionType,
    FilterExpr,
    GroupExpr,
    IndexExpr,
    LiteralExpr,
    LogicalExpr,
    Loop,
    PropertyExpr,
    RangeExpr,
    Statement,
    VariableExpr,
    When,
)

LOOP_OPTIONS = ("limit", "offset", "cols")

_LITERAL_KEYWORDS = {"true": True, "false": False, "nil": None, "null": None}


class StatementSelector(enum.Enum):
    """Statement forms a tag can ask for."""
    ASSIGN = "assign"
    LOOP = "loop"
    CYCLE = "cycle"
    WHEN = "when"


class ExpressionParser:
    """
    Recursive-descent expression parser.

    Holds per-call parsing state, so an instance must not be shared
    between threads.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0
        self._statement_parsers: Dict[StatementSelector, Callable[[], Statement]] = {
            StatementSelector.ASSIGN: self._parse_assignment,
            StatementSelector.LOOP: self._parse_loop,
            StatementSelector.CYCLE: self._parse_cycle,
            StatementSelector.WHEN: self._parse_when,
        }

    def parse(self, text: str) -> Expression:
        """
        Parses expression text.

        Args:
            text: Expression source, e.g. 'page.title | upcase'

        Returns:
            Root expression node

        Raises:
            ExpressionSyntaxError: On lexical or grammar errors
        """
        self._reset(text)
        if self._is_at_end():
            raise ExpressionSyntaxError("empty expression", 0)

        result = self._parse_logical()
        self._expect_end()
        return result

    def parse_statement(self, selector: StatementSelector, text: str) -> Statement:
        """
        Parses tag arguments of a fixed statement form.

        Args:
            selector: Which statement form to accept
            text: Tag argument text

        Returns:
            Assignment, Loop, Cycle or When

        Raises:
            ExpressionSyntaxError: On lexical or grammar errors
        """
        self._reset(text)
        if self._is_at_end():
            raise ExpressionSyntaxError(f"empty {selector.value} statement", 0)

        result = self._statement_parsers[selector]()
        self._expect_end()
        return result

    # ---- Expressions --------------------------------------------------------

    def _parse_logical(self) -> Expression:
        left = self._parse_comparison()

        if self._match_keyword("and"):
            return LogicalExpr(left=left, right=self._parse_logical(), operator=ExpressionType.AND)
        if self._match_keyword("or"):
            return LogicalExpr(left=left, right=self._parse_logical(), operator=ExpressionType.OR)

        return left

    def _parse_comparison(self) -> Expression:
        left = self._parse_filtered()

        while True:
            current = self._current_token()
            if current.type == 'OPERATOR' or (current.type == 'KEYWORD' and current.value == "contains"):
                self._advance()
                right = self._parse_filtered()
                left = ComparisonExpr(left=left, right=right, operator=current.value)
            else:
                return left

    def _parse_filtered(self) -> Expression:
        expr = self._parse_primary()

        while self._match_symbol("|"):
            name = self._consume_identifier("expected filter name after '|'").value
            args: List[Expression] = []
            kwargs: List[Tuple[str, Expression]] = []
            if self._match_symbol(":"):
                self._parse_filter_args(args, kwargs)
            expr = FilterExpr(target=expr, name=name, args=tuple(args), kwargs=tuple(kwargs))

        return expr

    def _parse_filter_args(self, args: List[Expression], kwargs: List[Tuple[str, Expression]]) -> None:
        while True:
            if self._current_token().type == 'IDENTIFIER' and self._peek_is_symbol(":"):
                key = self._advance().value
                self._advance()
                kwargs.append((key, self._parse_primary()))
            else:
                if kwargs:
                    raise ExpressionSyntaxError(
                        "positional filter argument after keyword argument", self._current_position()
                    )
                args.append(self._parse_primary())

            if not self._match_symbol(","):
                return

    def _parse_primary(self) -> Expression:
        current = self._current_token()

        if self._match_symbol("("):
            inner = self._parse_logical()
            if self._match_symbol(".."):
                end = self._parse_logical()
                self._expect_symbol(")", "expected ')' after range")
                expr: Expression = RangeExpr(start=inner, end=end)
            else:
                self._expect_symbol(")", "expected ')' after grouped expression")
                expr = GroupExpr(expr=inner)
        elif current.type == 'INT':
            self._advance()
            expr = LiteralExpr(int(current.value))
        elif current.type == 'FLOAT':
            self._advance()
            expr = LiteralExpr(float(current.value))
        elif current.type == 'STRING':
            self._advance()
            expr = LiteralExpr(current.value)
        elif current.type == 'KEYWORD' and current.value in _LITERAL_KEYWORDS:
            self._advance()
            expr = LiteralExpr(_LITERAL_KEYWORDS[current.value])
        elif current.type == 'IDENTIFIER':
            self._advance()
            expr = VariableExpr(current.value)
        elif current.type == 'EOF':
            raise ExpressionSyntaxError("unexpected end of expression", current.position)
        else:
            raise ExpressionSyntaxError(f"unexpected token '{current.value}'", current.position)

        return self._parse_accessors(expr)

    def _parse_accessors(self, expr: Expression) -> Expression:
        while True:
            if self._match_symbol("."):
                current = self._current_token()
                if current.type in ('IDENTIFIER', 'KEYWORD'):
                    self._advance()
                    expr = PropertyExpr(target=expr, name=current.value)
                elif current.type == 'INT':
                    self._advance()
                    expr = IndexExpr(target=expr, index=LiteralExpr(int(current.value)))
                else:
                    raise ExpressionSyntaxError("expected property name after '.'", current.position)
            elif self._match_symbol("["):
                index = self._parse_logical()
                self._expect_symbol("]", "expected ']' after index")
                expr = IndexExpr(target=expr, index=index)
            else:
                return expr

    # ---- Statements ---------------------------------------------------------

    def _parse_assignment(self) -> Assignment:
        name = self._consume_identifier("expected variable name").value
        self._expect_symbol("=", f"expected '=' after '{name}'")
        return Assignment(variable=name, value=self._parse_logical())

    def _parse_loop(self) -> Loop:
        name = self._consume_identifier("expected loop variable name").value
        if not self._match_keyword("in"):
            raise ExpressionSyntaxError(f"expected 'in' after '{name}'", self._current_position())
        source = self._parse_primary()

        is_reversed = False
        options: Dict[str, Expression] = {}
        while not self._is_at_end():
            current = self._current_token()
            if self._match_keyword("reversed"):
                is_reversed = True
            elif current.type == 'IDENTIFIER' and current.value in LOOP_OPTIONS and self._peek_is_symbol(":"):
                self._advance()
                self._advance()
                options[current.value] = self._parse_primary()
            else:
                raise ExpressionSyntaxError(f"unexpected token '{current.value}'", current.position)

        return Loop(
            variable=name,
            expr=source,
            reversed=is_reversed,
            limit=options.get("limit"),
            offset=options.get("offset"),
            cols=options.get("cols"),
        )

    def _parse_cycle(self) -> Cycle:
        group: Optional[Expression] = None
        first = self._parse_primary()
        if self._match_symbol(":"):
            group = first
            first = self._parse_primary()

        values = [first]
        while self._match_symbol(","):
            values.append(self._parse_primary())
        return Cycle(values=tuple(values), group=group)

    def _parse_when(self) -> When:
        values = [self._parse_primary()]
        while self._match_symbol(",") or self._match_keyword("or"):
            values.append(self._parse_primary())
        return When(values=tuple(values))

    # ---- Token helpers ------------------------------------------------------

    def _reset(self, text: str) -> None:
        self._tokens = self.lexer.tokenize(text)
        self._position = 0

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return Token(type='EOF', value='', position=len(self._tokens))
        return self._tokens[self._position]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        """Moves forward and returns the consumed token."""
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _peek_is_symbol(self, symbol: str) -> bool:
        """Checks the token after the current one."""
        if self._position + 1 >= len(self._tokens):
            return False
        token = self._tokens[self._position + 1]
        return token.type == 'SYMBOL' and token.value == symbol

    def _match_keyword(self, keyword: str) -> bool:
        current = self._current_token()
        if current.type == 'KEYWORD' and current.value == keyword:
            self._advance()
            return True
        return False

    def _match_symbol(self, symbol: str) -> bool:
        current = self._current_token()
        if current.type == 'SYMBOL' and current.value == symbol:
            self._advance()
            return True
        return False

    def _expect_symbol(self, symbol: str, error_message: str) -> None:
        if not self._match_symbol(symbol):
            raise ExpressionSyntaxError(error_message, self._current_position())

    def _consume_identifier(self, error_message: str) -> Token:
        current = self._current_token()
        if current.type == 'IDENTIFIER':
            return self._advance()
        raise ExpressionSyntaxError(error_message, current.position)

    def _expect_end(self) -> None:
        if not self._is_at_end():
            current = self._current_token()
            raise ExpressionSyntaxError(f"unexpected token '{current.value}'", current.position)


def parse_expression(text: str) -> Expression:
    """Parses expression text with a fresh parser."""
    return ExpressionParser().parse(text)


def parse_statement(selector: StatementSelector, text: str) -> Statement:
    """Parses statement text with a fresh parser."""
    return ExpressionParser().parse_statement(selector, text)


__all__ = [
    "StatementSelector",
    "ExpressionParser",
    "parse_expression",
    "parse_statement",
    "LOOP_OPTIONS",
]
