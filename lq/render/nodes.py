"""
Compiled render tree.

Mirrors the AST, with tags and blocks bound to the render functions
their compilers produced. Immutable after compilation, so one tree can be
rendered by several independent render calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

from ..parser.nodes import ASTBlock, ASTObject, ASTRaw, ASTTag, ASTText
from ..parser.tokens import SourceLoc

if TYPE_CHECKING:
    from ..expressions.model import Expression
    from .context import RenderContext
    from .control import Control

RenderFn = Callable[["RenderContext"], Optional["Control"]]


class Node:
    """Base class for compiled nodes."""

    @property
    def loc(self) -> SourceLoc:
        return SourceLoc()


@dataclass
class SeqNode(Node):
    children: List[Node] = field(default_factory=list)


@dataclass
class TextNode(Node):
    source: ASTText

    @property
    def text(self) -> str:
        return self.source.text

    @property
    def loc(self) -> SourceLoc:
        return self.source.loc


@dataclass
class ObjectNode(Node):
    source: ASTObject

    @property
    def expr(self) -> Expression:
        return self.source.expr

    @property
    def loc(self) -> SourceLoc:
        return self.source.loc


@dataclass
class TagNode(Node):
    source: ASTTag
    renderer: RenderFn

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def loc(self) -> SourceLoc:
        return self.source.loc


@dataclass
class BlockNode(Node):
    """
    Compiled block or clause.

    The block compiler receives this node with body and clauses already
    compiled; clauses themselves carry no renderer.
    """
    source: ASTBlock
    body: List[Node] = field(default_factory=list)
    clauses: List[BlockNode] = field(default_factory=list)
    renderer: Optional[RenderFn] = None

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def args(self) -> str:
        return self.source.args

    @property
    def loc(self) -> SourceLoc:
        return self.source.loc


@dataclass
class RawNode(Node):
    source: ASTRaw

    @property
    def slices(self) -> List[str]:
        return self.source.slices


__all__ = [
    "RenderFn",
    "Node",
    "SeqNode",
    "TextNode",
    "ObjectNode",
    "TagNode",
    "BlockNode",
    "RawNode",
]
