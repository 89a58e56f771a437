"""
Variable tags: assign, capture, and the include tag.
"""

from __future__ import annotations

from typing import Optional, cast

from ..expressions.model import Assignment
from ..expressions.parser import ExpressionParser, StatementSelector
from ..render.context import RenderContext
from ..render.control import Control
from ..render.nodes import BlockNode, RenderFn
from ..values import to_string
from .common import with_expressions


def compile_assign(args: str) -> RenderFn:
    """{% assign name = expression %}"""
    statement = cast(Assignment, ExpressionParser().parse_statement(StatementSelector.ASSIGN, args))

    def render(context: RenderContext) -> Optional[Control]:
        context.set(statement.variable, context.evaluate(statement.value))
        return None

    return with_expressions(render, statement)


def compile_capture(node: BlockNode) -> RenderFn:
    """
    {% capture name %}...{% endcapture %}

    Only the first word of the arguments names the variable.
    """
    words = node.args.split()
    if not words:
        raise ValueError("capture requires a variable name")
    name = words[0]

    def render(context: RenderContext) -> Optional[Control]:
        context.set(name, context.render_to_string(node))
        return None

    return render


def compile_include(args: str) -> RenderFn:
    """
    {% include "path" %}

    Renders another template file relative to the including one, with
    the current bindings.
    """
    target = ExpressionParser().parse(args)

    def render(context: RenderContext) -> Optional[Control]:
        filename = to_string(context.evaluate(target))
        context.write(context.render_file(filename))
        return None

    return with_expressions(render, target)


def compile_nothing(node: BlockNode) -> RenderFn:
    """Compiler for comment and raw, whose content the parser already handled."""

    def render(context: RenderContext) -> Optional[Control]:
        return None

    return render


__all__ = ["compile_assign", "compile_capture", "compile_include", "compile_nothing"]
