"""
Render configuration: tag and block registry.

RenderConfig is the grammar the structural parser consults and the
registry of compilers the compiler calls. Built once at engine setup,
read-only afterwards.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Set

from ..parser.config import ParserConfig
from ..parser.grammar import BlockSyntax
from ..parser.tokens import SourceLoc
from .nodes import RenderFn

if TYPE_CHECKING:
    from .nodes import BlockNode, Node

logger = logging.getLogger(__name__)

TagCompiler = Callable[[str], RenderFn]
BlockCompiler = Callable[["BlockNode"], RenderFn]


class BlockRole(enum.Enum):
    """Structural role of a block-related tag name."""
    START = "start"
    CLAUSE = "clause"
    END = "end"


class BlockDefinition:
    """
    One block-related tag name: a block start, a clause or an end tag.

    Implements the BlockSyntax protocol for the structural parser. The
    builder methods clause() and compiler() return the start definition,
    so registrations chain:

        config.add_block("if").clause("elsif").clause("else").compiler(compile_if)
    """

    def __init__(self, name: str, role: BlockRole, config: RenderConfig):
        self.name = name
        self.role = role
        self.parents: Set[str] = set()
        self.block_compiler: Optional[BlockCompiler] = None
        self._config = config

    @property
    def tag_name(self) -> str:
        return self.name

    def is_block_start(self) -> bool:
        return self.role is BlockRole.START

    def is_clause(self) -> bool:
        return self.role is BlockRole.CLAUSE

    def is_block_end(self) -> bool:
        return self.role is BlockRole.END

    def requires_parent(self) -> bool:
        return self.role is not BlockRole.START

    def can_have_parent(self, parent: BlockSyntax) -> bool:
        return parent.tag_name in self.parents

    def parent_tags(self) -> List[str]:
        return sorted(self.parents)

    def clause(self, name: str) -> BlockDefinition:
        """
        Allows a clause inside this block; a clause name may be shared
        by several blocks (else belongs to if, unless, case and for).
        """
        self._config.define_clause(name, self.name)
        return self

    def compiler(self, fn: BlockCompiler) -> BlockDefinition:
        """Sets the compiler that turns a parsed block into a render function."""
        self.block_compiler = fn
        return self

    def __repr__(self) -> str:
        return f"BlockDefinition({self.name!r}, {self.role.value})"


@dataclass(eq=False)
class RenderConfig(ParserConfig):
    """
    Parser settings plus tag and block compilers.
    """
    tags: Dict[str, TagCompiler] = field(default_factory=dict)
    blocks: Dict[str, BlockDefinition] = field(default_factory=dict)

    def __post_init__(self):
        self.grammar = self

    def add_tag(self, name: str, compiler: TagCompiler) -> None:
        """
        Registers a tag without body.

        Args:
            name: Tag name
            compiler: compiler(args) -> render function; called once per
                      tag occurrence at compile time
        """
        if name in self.tags:
            logger.warning("Tag '%s' is already registered; replacing it", name)
        self.tags[name] = compiler

    def add_block(self, name: str) -> BlockDefinition:
        """
        Registers a block tag and its implicit end tag "end<name>".

        Returns:
            Block definition for chaining clause() and compiler()
        """
        existing = self.blocks.get(name)
        if existing is not None and existing.is_block_start():
            logger.warning("Block '%s' is already registered; replacing it", name)

        definition = BlockDefinition(name, BlockRole.START, self)
        self.blocks[name] = definition

        end = BlockDefinition("end" + name, BlockRole.END, self)
        end.parents.add(name)
        self.blocks[end.name] = end
        return definition

    def define_clause(self, name: str, parent: str) -> BlockDefinition:
        """
        Creates or extends a clause definition.

        Raises:
            ValueError: If the name is already a block start or end tag
        """
        definition = self.blocks.get(name)
        if definition is None:
            definition = BlockDefinition(name, BlockRole.CLAUSE, self)
            self.blocks[name] = definition
        elif not definition.is_clause():
            raise ValueError(f"'{name}' is already registered as a {definition.role.value} tag")
        definition.parents.add(parent)
        return definition

    def block_syntax(self, name: str) -> Optional[BlockSyntax]:
        return self.blocks.get(name)

    def find_tag_compiler(self, name: str) -> Optional[TagCompiler]:
        return self.tags.get(name)

    def find_block_compiler(self, name: str) -> Optional[BlockCompiler]:
        definition = self.blocks.get(name)
        return definition.block_compiler if definition is not None else None

    def compile(self, source: str, loc: Optional[SourceLoc] = None) -> Node:
        """
        Parses and compiles template source.

        Raises:
            TemplateSyntaxError: On parse errors
            CompileError: On unknown tags or compiler failures
        """
        from ..parser.parser import TemplateParser
        from .compiler import Compiler

        ast = TemplateParser(self).parse(source, loc)
        return Compiler(self).compile(ast)


__all__ = ["BlockRole", "BlockDefinition", "RenderConfig", "TagCompiler", "BlockCompiler"]
