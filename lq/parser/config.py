"""
Configuration for the structural parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..expressions.config import ExpressionConfig
from .grammar import BlockSyntax, Grammar


class _EmptyGrammar:
    """Grammar with no block tags; every tag parses as a plain tag."""

    def block_syntax(self, name: str) -> Optional[BlockSyntax]:
        return None


@dataclass
class ParserConfig(ExpressionConfig):
    """
    Expression settings plus what the structural parser needs.

    Attributes:
        grammar: Block syntax lookup; RenderConfig supplies itself
        delims: Optional [object_left, object_right, tag_left, tag_right]
    """
    grammar: Grammar = field(default_factory=_EmptyGrammar)
    delims: Optional[List[str]] = None


__all__ = ["ParserConfig"]
