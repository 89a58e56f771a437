"""
Conditional tags: if, unless, case.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..expressions.model import Expression, When
from ..expressions.parser import ExpressionParser, StatementSelector
from ..render.context import RenderContext
from ..render.control import Control
from ..render.nodes import BlockNode, RenderFn
from ..values import equal, is_truthy
from .common import with_expressions


def if_compiler(polarity: bool):
    """
    Builds the compiler for if (polarity True) or unless (False).

    Only the leading condition is negated for unless; elsif branches
    test their own condition as written.
    """

    def compile_if(node: BlockNode) -> RenderFn:
        parser = ExpressionParser()
        branches: List[Tuple[Expression, BlockNode]] = [(parser.parse(node.args), node)]
        otherwise: Optional[BlockNode] = None

        for clause in node.clauses:
            if clause.name == "elsif":
                branches.append((parser.parse(clause.args), clause))
            elif clause.name == "else":
                otherwise = clause

        def render(context: RenderContext) -> Optional[Control]:
            for index, (condition, body) in enumerate(branches):
                matched = is_truthy(context.evaluate(condition))
                if index == 0 and not polarity:
                    matched = not matched
                if matched:
                    return context.render_body(body)
            if otherwise is not None:
                return context.render_body(otherwise)
            return None

        return with_expressions(render, *(condition for condition, _ in branches))

    return compile_if


def compile_case(node: BlockNode) -> RenderFn:
    """
    {% case value %}{% when a, b %}...{% else %}...{% endcase %}

    The first when clause with a matching value renders; text between
    case and the first when is ignored.
    """
    parser = ExpressionParser()
    subject = parser.parse(node.args)
    branches: List[Tuple[When, BlockNode]] = []
    otherwise: Optional[BlockNode] = None

    for clause in node.clauses:
        if clause.name == "when":
            branches.append((parser.parse_statement(StatementSelector.WHEN, clause.args), clause))
        elif clause.name == "else":
            otherwise = clause

    def render(context: RenderContext) -> Optional[Control]:
        value = context.evaluate(subject)
        for when, body in branches:
            if any(equal(value, context.evaluate(candidate)) for candidate in when.values):
                return context.render_body(body)
        if otherwise is not None:
            return context.render_body(otherwise)
        return None

    return with_expressions(render, subject, *(when for when, _ in branches))


__all__ = ["if_compiler", "compile_case"]
