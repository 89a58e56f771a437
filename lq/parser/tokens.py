"""
Lexical types for template source.

A template is split into three kinds of tokens: literal text, tags
(`{% name args %}`) and objects (`{{ expression }}`).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Token types produced by the scanner."""
    TEXT = "TEXT"
    TAG = "TAG"
    OBJECT = "OBJECT"


@dataclass(frozen=True)
class SourceLoc:
    """
    Position of a token in template source.

    line_no is 1-based; 0 means the location is unknown.
    """
    pathname: str = ""
    line_no: int = 0

    def __str__(self) -> str:
        if self.pathname:
            return f"{self.pathname}:{self.line_no}"
        return f"line {self.line_no}"


@dataclass(frozen=True)
class Token:
    """
    Token with source location for precise error reporting.
    """
    type: TokenType
    loc: SourceLoc
    name: str = ""           # Tag name; empty for TEXT and OBJECT
    args: str = ""           # Trimmed tag arguments or object expression
    source: str = ""         # Raw matched text, delimiters included
    trim_left: bool = False
    trim_right: bool = False

    def __repr__(self) -> str:
        if self.type is TokenType.TEXT:
            return f"Token(TEXT, {self.source!r}, {self.loc.line_no})"
        if self.type is TokenType.TAG:
            return f"Token(TAG, {self.name!r}, {self.args!r}, {self.loc.line_no})"
        return f"Token(OBJECT, {self.args!r}, {self.loc.line_no})"


__all__ = ["TokenType", "SourceLoc", "Token"]
