"""
AST nodes produced by the structural parser.

The tree is built bottom-up by appending into the currently open
insertion point (a children/body list); once parsing completes nobody
mutates it. Nodes own their children exclusively.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from .tokens import SourceLoc, Token

if TYPE_CHECKING:
    from ..expressions.model import Expression
    from .grammar import BlockSyntax


@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class ASTSeq(ASTNode):
    """Ordered sequence of nodes; the root of every parsed template."""
    children: List[ASTNode] = field(default_factory=list)


@dataclass(frozen=True)
class ASTText(ASTNode):
    """
    Literal text span.

    text is the token source after whitespace control was applied.
    """
    token: Token
    text: str

    @property
    def loc(self) -> SourceLoc:
        return self.token.loc


@dataclass(frozen=True)
class ASTObject(ASTNode):
    """Object {{ expression }} with its parsed expression."""
    token: Token
    expr: Expression

    @property
    def loc(self) -> SourceLoc:
        return self.token.loc


@dataclass(frozen=True)
class ASTTag(ASTNode):
    """
    Plain tag without body.

    Interpretation is deferred to compile time, so an unknown tag is only
    reported when the template is compiled.
    """
    token: Token

    @property
    def name(self) -> str:
        return self.token.name

    @property
    def args(self) -> str:
        return self.token.args

    @property
    def loc(self) -> SourceLoc:
        return self.token.loc


@dataclass(frozen=True)
class ASTBlock(ASTNode):
    """
    Block {% name args %}body{% endname %} or one of its clauses.

    Clauses (elsif/else/when) are ASTBlock instances stored in the
    clauses list of the block they belong to, in source order.
    """
    token: Token
    syntax: BlockSyntax
    body: List[ASTNode] = field(default_factory=list)
    clauses: List[ASTBlock] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.token.name

    @property
    def args(self) -> str:
        return self.token.args

    @property
    def loc(self) -> SourceLoc:
        return self.token.loc


@dataclass(frozen=True)
class ASTRaw(ASTNode):
    """Contents of {% raw %}...{% endraw %} as literal source slices."""
    slices: List[str] = field(default_factory=list)


__all__ = [
    "ASTNode",
    "ASTSeq",
    "ASTText",
    "ASTObject",
    "ASTTag",
    "ASTBlock",
    "ASTRaw",
]
