"""
Protocols for the tag grammar consumed by the structural parser.

The parser does not know concrete tags. It asks the grammar whether a tag
name is a block construct and, if so, what structural role it plays.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class BlockSyntax(Protocol):
    """
    Structural rules of one block-related tag name.

    Exactly one of is_block_start/is_clause/is_block_end is true.
    """

    @property
    def tag_name(self) -> str:
        ...

    def is_block_start(self) -> bool:
        ...

    def is_clause(self) -> bool:
        ...

    def is_block_end(self) -> bool:
        ...

    def requires_parent(self) -> bool:
        """True for clauses and end tags: they are only legal inside a parent block."""
        ...

    def can_have_parent(self, parent: BlockSyntax) -> bool:
        """
        Checks the immediately enclosing open block.

        Args:
            parent: Syntax of the innermost open block
        """
        ...

    def parent_tags(self) -> List[str]:
        """Names of the blocks this tag may appear in, for error messages."""
        ...


@runtime_checkable
class Grammar(Protocol):
    """Lookup of block syntax by tag name."""

    def block_syntax(self, name: str) -> Optional[BlockSyntax]:
        """
        Returns the block syntax for a tag name, or None for plain
        (or unknown) tags.
        """
        ...


__all__ = ["BlockSyntax", "Grammar"]
