"""
Structural parser: token list -> AST.

Matches block starts, clauses and ends using the grammar from the
config, applies whitespace control and parses object expressions.
Blocks are tracked on an explicit stack, so nesting depth is bounded only
by memory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..errors import TemplateSyntaxError
from ..expressions.errors import ExpressionSyntaxError
from ..expressions.parser import ExpressionParser
from .config import ParserConfig
from .grammar import BlockSyntax
from .nodes import ASTBlock, ASTNode, ASTObject, ASTRaw, ASTSeq, ASTTag, ASTText
from .scanner import scan
from .tokens import SourceLoc, Token, TokenType

logger = logging.getLogger(__name__)

COMMENT_TAG = "comment"
RAW_TAG = "raw"


@dataclass
class _Frame:
    """
    One open block.

    syntax/block are None for the template root. body is the current
    insertion point: the block body, or the body of its latest clause.
    """
    syntax: Optional[BlockSyntax]
    block: Optional[ASTBlock]
    body: List[ASTNode]


def trim_whitespace(tokens: List[Token]) -> List[Optional[str]]:
    """
    Applies whitespace control flags.

    A markup token with trim_left strips trailing whitespace from the
    text before it; trim_right strips leading whitespace from the text
    after it.

    Returns:
        Text to use for each TEXT token (None at markup positions)
    """
    texts = [t.source if t.type is TokenType.TEXT else None for t in tokens]
    for i, token in enumerate(tokens):
        if token.type is TokenType.TEXT:
            continue
        if token.trim_left and i > 0 and texts[i - 1] is not None:
            texts[i - 1] = texts[i - 1].rstrip()
        if token.trim_right and i + 1 < len(tokens) and texts[i + 1] is not None:
            texts[i + 1] = texts[i + 1].lstrip()
    return texts


class TemplateParser:
    """
    Builds an AST from template tokens.

    Not thread-safe: holds an expression parser with per-call state.
    """

    def __init__(self, config: ParserConfig):
        self.config = config
        self.grammar = config.grammar
        self.expression_parser = ExpressionParser()

    def parse(self, source: str, loc: Optional[SourceLoc] = None) -> ASTSeq:
        """
        Scans and parses template source.

        Args:
            source: Template text
            loc: Path and starting line for error messages

        Returns:
            Root sequence node

        Raises:
            TemplateSyntaxError: On structural or expression syntax errors
        """
        tokens = scan(source, loc, self.config.delims)
        return self.parse_tokens(tokens)

    def parse_tokens(self, tokens: List[Token]) -> ASTSeq:
        """
        Parses a token list.

        Raises:
            TemplateSyntaxError: On structural or expression syntax errors
        """
        texts = trim_whitespace(tokens)

        root = ASTSeq()
        frame = _Frame(syntax=None, block=None, body=root.children)
        stack: List[_Frame] = []

        comment_start: Optional[Token] = None
        raw_start: Optional[Token] = None
        raw_node: Optional[ASTRaw] = None

        for token, text in zip(tokens, texts):
            if comment_start is not None:
                if token.type is TokenType.TAG and token.name == "end" + COMMENT_TAG:
                    comment_start = None
                continue

            if raw_node is not None:
                if token.type is TokenType.TAG and token.name == "end" + RAW_TAG:
                    raw_node = None
                    raw_start = None
                elif token.source:
                    # Trim markers are literal text here
                    raw_node.slices.append(token.source)
                continue

            if token.type is TokenType.TEXT:
                if text:
                    frame.body.append(ASTText(token=token, text=text))

            elif token.type is TokenType.OBJECT:
                frame.body.append(ASTObject(token=token, expr=self._parse_object(token)))

            else:
                if not token.name:
                    raise TemplateSyntaxError("tag name is missing", token.loc)

                syntax = self.grammar.block_syntax(token.name)
                if syntax is None:
                    frame.body.append(ASTTag(token=token))
                    continue

                if token.name == COMMENT_TAG and syntax.is_block_start():
                    comment_start = token
                    continue
                if token.name == RAW_TAG and syntax.is_block_start():
                    raw_start = token
                    raw_node = ASTRaw()
                    frame.body.append(raw_node)
                    continue

                self._check_parent(token, syntax, frame)

                if syntax.is_block_start():
                    block = ASTBlock(token=token, syntax=syntax)
                    frame.body.append(block)
                    stack.append(frame)
                    frame = _Frame(syntax=syntax, block=block, body=block.body)
                elif syntax.is_clause():
                    clause = ASTBlock(token=token, syntax=syntax)
                    frame.block.clauses.append(clause)
                    frame = _Frame(syntax=frame.syntax, block=frame.block, body=clause.body)
                elif syntax.is_block_end():
                    frame = stack.pop()

        if comment_start is not None:
            raise TemplateSyntaxError(f'unterminated "{COMMENT_TAG}" block', comment_start.loc)
        if raw_start is not None:
            raise TemplateSyntaxError(f'unterminated "{RAW_TAG}" block', raw_start.loc)
        if frame.block is not None:
            raise TemplateSyntaxError(f'unterminated "{frame.block.name}" block', frame.block.loc)

        logger.debug("Parsed %d tokens into %d top-level nodes", len(tokens), len(root.children))
        return root

    def _parse_object(self, token: Token):
        try:
            return self.expression_parser.parse(token.args)
        except ExpressionSyntaxError as e:
            raise TemplateSyntaxError(str(e), token.loc, cause=e) from e

    @staticmethod
    def _check_parent(token: Token, syntax: BlockSyntax, frame: _Frame) -> None:
        if not syntax.requires_parent():
            return
        parent = frame.syntax
        if parent is not None and syntax.can_have_parent(parent):
            return

        message = f"{token.name} not inside {' or '.join(syntax.parent_tags())}"
        if parent is not None:
            message += f"; immediate parent is {parent.tag_name}"
        raise TemplateSyntaxError(message, token.loc)


def parse_template(source: str, config: ParserConfig, loc: Optional[SourceLoc] = None) -> ASTSeq:
    """Convenience function: scan and parse with a fresh parser."""
    return TemplateParser(config).parse(source, loc)


__all__ = ["TemplateParser", "parse_template", "trim_whitespace"]
