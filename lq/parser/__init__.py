"""
Template source -> AST.

Scanner splits text into tokens; TemplateParser matches block structure
against a grammar and parses object expressions.
"""

from __future__ import annotations

from .config import ParserConfig
from .grammar import BlockSyntax, Grammar
from .nodes import ASTBlock, ASTNode, ASTObject, ASTRaw, ASTSeq, ASTTag, ASTText
from .parser import TemplateParser, parse_template
from .scanner import DEFAULT_DELIMS, Scanner, scan
from .tokens import SourceLoc, Token, TokenType

__all__ = [
    "ParserConfig",
    "BlockSyntax",
    "Grammar",
    "ASTNode",
    "ASTSeq",
    "ASTText",
    "ASTObject",
    "ASTTag",
    "ASTBlock",
    "ASTRaw",
    "TemplateParser",
    "parse_template",
    "DEFAULT_DELIMS",
    "Scanner",
    "scan",
    "SourceLoc",
    "Token",
    "TokenType",
]
