"""
Lexer for expressions found in objects and tag arguments.

Splits expression text into meaningful elements:
- Literals (strings, integers, floats)
- Keywords (and, or, contains, in, reversed, true, false, nil, null)
- Identifiers (variable, property and filter names)
- Operators (comparisons) and symbols (| : , . ( ) [ ] = ..)
- Whitespace (ignored)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from .errors import ExpressionSyntaxError


@dataclass
class Token:
    """
    Expression token.

    Attributes:
        type: Token type (STRING, INT, FLOAT, KEYWORD, IDENTIFIER, OPERATOR, SYMBOL, EOF)
        value: Token text; strings without their quotes
        position: Offset in the source text
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ExpressionLexer:
    """
    Tokenizer for expression text.

    Patterns are tried in order; the first match wins. That makes "=="
    an operator before "=" is considered, and "1..5" an integer followed
    by a range symbol rather than a float.
    """

    # (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        (r'"[^"]*"', 'STRING', False),
        (r"'[^']*'", 'STRING', False),

        (r'-?\d+\.\d+', 'FLOAT', False),
        (r'-?\d+', 'INT', False),

        (r'\.\.', 'SYMBOL', False),
        (r'==|!=|<>|<=|>=|<|>', 'OPERATOR', False),
        (r'[|:,.()\[\]=]', 'SYMBOL', False),

        # Keywords are told apart after capture
        (r'[A-Za-z_][\w-]*\??', 'IDENTIFIER', False),

        (r'.', 'UNKNOWN', False),
    ]

    KEYWORDS = {
        'and', 'or', 'contains', 'in', 'reversed', 'true', 'false', 'nil', 'null'
    }

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Splits text into tokens.

        Args:
            text: Expression text

        Returns:
            Token list terminated by EOF

        Raises:
            ExpressionSyntaxError: On a character no pattern accepts
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)
                if not ignore:
                    if token_type == 'UNKNOWN':
                        raise ExpressionSyntaxError(f"unexpected character '{value}'", position)

                    final_type = token_type
                    if token_type == 'IDENTIFIER' and value in self.KEYWORDS:
                        final_type = 'KEYWORD'
                    elif token_type == 'STRING':
                        value = value[1:-1]

                    tokens.append(Token(type=final_type, value=value, position=position))

                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens


__all__ = ["Token", "ExpressionLexer"]
