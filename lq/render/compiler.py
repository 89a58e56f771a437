"""
Compiler: AST -> render tree.

Compiles bottom-up: a block's body and clauses are compiled before its
compiler runs, so the render function it returns can close over the
compiled sub-trees.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from ..errors import CompileError, LQError
from ..parser.nodes import ASTBlock, ASTNode, ASTObject, ASTRaw, ASTSeq, ASTTag, ASTText
from .config import RenderConfig
from .nodes import BlockNode, Node, ObjectNode, RawNode, SeqNode, TagNode, TextNode

logger = logging.getLogger(__name__)


class Compiler:
    """
    Binds parsed tags and blocks to render functions.
    """

    def __init__(self, config: RenderConfig):
        self.config = config
        self._compiled_tags = 0

    def compile(self, ast: ASTNode) -> Node:
        """
        Compiles an AST.

        Walks the tree in post-order with an explicit stack, so nesting
        depth is not limited by the interpreter's recursion limit.

        Args:
            ast: Parsed template, usually an ASTSeq

        Returns:
            Compiled render tree

        Raises:
            CompileError: On an unknown tag, a block without compiler, or a
                          compiler callback rejecting its arguments
        """
        self._compiled_tags = 0

        compiled: List[Node] = []
        stack: List[Tuple[ASTNode, bool, bool]] = [(ast, False, False)]
        while stack:
            current, is_clause, expanded = stack.pop()
            children = _child_asts(current, is_clause)
            if children and not expanded:
                stack.append((current, is_clause, True))
                stack.extend(reversed(children))
                continue

            parts: List[Node] = []
            if children:
                parts = compiled[-len(children):]
                del compiled[-len(children):]
            compiled.append(self._build(current, is_clause, parts))

        logger.debug("Compiled template with %d tags and blocks", self._compiled_tags)
        return compiled[0]

    def _build(self, ast: ASTNode, is_clause: bool, parts: List[Node]) -> Node:
        if isinstance(ast, ASTSeq):
            return SeqNode(children=parts)
        if isinstance(ast, ASTText):
            return TextNode(source=ast)
        if isinstance(ast, ASTObject):
            return ObjectNode(source=ast)
        if isinstance(ast, ASTRaw):
            return RawNode(source=ast)
        if isinstance(ast, ASTTag):
            return self._compile_tag(ast)
        if isinstance(ast, ASTBlock):
            if is_clause:
                return BlockNode(source=ast, body=parts)
            body_size = len(ast.body)
            return self._compile_block(ast, parts[:body_size], parts[body_size:])
        raise TypeError(f"Unknown AST node type: {type(ast).__name__}")

    def _compile_tag(self, ast: ASTTag) -> TagNode:
        compiler = self.config.find_tag_compiler(ast.name)
        if compiler is None:
            raise CompileError(f'undefined tag "{ast.name}"', ast.loc)

        try:
            renderer = compiler(ast.args)
        except CompileError:
            raise
        except (LQError, ValueError) as e:
            raise CompileError(str(e), ast.loc, cause=e) from e

        self._compiled_tags += 1
        return TagNode(source=ast, renderer=renderer)

    def _compile_block(self, ast: ASTBlock, body: List[Node], clauses: List[Node]) -> BlockNode:
        node = BlockNode(source=ast, body=body, clauses=clauses)

        compiler = self.config.find_block_compiler(ast.name)
        if compiler is None:
            raise CompileError(f'undefined block "{ast.name}"', ast.loc)

        try:
            node.renderer = compiler(node)
        except CompileError:
            raise
        except (LQError, ValueError) as e:
            raise CompileError(str(e), ast.loc, cause=e) from e

        self._compiled_tags += 1
        return node


def _child_asts(ast: ASTNode, is_clause: bool) -> List[Tuple[ASTNode, bool, bool]]:
    """Stack entries for the children of a node, in source order."""
    if isinstance(ast, ASTSeq):
        return [(child, False, False) for child in ast.children]
    if isinstance(ast, ASTBlock):
        children = [(child, False, False) for child in ast.body]
        if not is_clause:
            children.extend((clause, True, False) for clause in ast.clauses)
        return children
    return []


__all__ = ["Compiler"]
