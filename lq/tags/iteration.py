"""
Loop tags: for, tablerow, cycle, break, continue.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence

from ..expressions.model import Loop
from ..expressions.parser import ExpressionParser, StatementSelector
from ..render.context import RenderContext
from ..render.control import Control
from ..render.nodes import BlockNode, RenderFn
from ..values import Shape, convert, is_sequence, to_liquid, to_string
from .common import with_expressions

CYCLE_STATE = "cycle"


def iteration_items(value: Any) -> Sequence[Any]:
    """
    Items a loop visits.

    Sequences are returned as is, so a range stays lazy until the loop
    slices it. Mappings yield [key, value] pairs, a non-empty string is a
    single item, nil and other scalars yield nothing.
    """
    value = to_liquid(value)
    if value is None:
        return []
    if is_sequence(value):
        return value
    if isinstance(value, Mapping):
        return [[key, item] for key, item in value.items()]
    if isinstance(value, str):
        return [value] if value else []
    return []


def _loop_items(loop: Loop, context: RenderContext) -> List[Any]:
    """Applies offset, limit and reversed, in that order."""
    items = iteration_items(context.evaluate(loop.expr))
    if loop.offset is not None:
        offset = convert(context.evaluate(loop.offset), Shape.INTEGER)
        items = items[max(offset, 0):]
    if loop.limit is not None:
        limit = convert(context.evaluate(loop.limit), Shape.INTEGER)
        items = items[:max(limit, 0)]
    items = list(items)
    if loop.reversed:
        items.reverse()
    return items


def _forloop(index: int, length: int, parent: Any) -> Dict[str, Any]:
    return {
        "index": index + 1,
        "index0": index,
        "rindex": length - index,
        "rindex0": length - index - 1,
        "first": index == 0,
        "last": index == length - 1,
        "length": length,
        "parentloop": parent,
    }


def compile_for(node: BlockNode) -> RenderFn:
    """
    {% for item in collection [reversed] [limit: n] [offset: n] %}...{% else %}...{% endfor %}
    """
    loop = ExpressionParser().parse_statement(StatementSelector.LOOP, node.args)
    otherwise: Optional[BlockNode] = next((c for c in node.clauses if c.name == "else"), None)

    def render(context: RenderContext) -> Optional[Control]:
        items = _loop_items(loop, context)
        if not items:
            if otherwise is not None:
                return context.render_body(otherwise)
            return None

        parent = context.get("forloop")
        with context.scope() as layer:
            for index, item in enumerate(items):
                layer[loop.variable] = item
                layer["forloop"] = _forloop(index, len(items), parent)
                if context.render_body(node) is Control.BREAK:
                    break
        return None

    return with_expressions(render, loop)


def compile_tablerow(node: BlockNode) -> RenderFn:
    """
    {% tablerow item in collection [cols: n] [limit: n] [offset: n] %}...{% endtablerow %}

    Writes <tr>/<td> markup with rowN/colN classes.
    """
    loop = ExpressionParser().parse_statement(StatementSelector.LOOP, node.args)

    def render(context: RenderContext) -> Optional[Control]:
        items = _loop_items(loop, context)
        length = len(items)
        cols = length
        if loop.cols is not None:
            cols = convert(context.evaluate(loop.cols), Shape.INTEGER)
        if cols <= 0:
            cols = max(length, 1)

        context.write('<tr class="row1">\n')
        with context.scope() as layer:
            for index, item in enumerate(items):
                row, col = divmod(index, cols)
                if index > 0 and col == 0:
                    context.write(f'</tr>\n<tr class="row{row + 1}">')

                info = _forloop(index, length, None)
                del info["parentloop"]
                info.update({
                    "col": col + 1,
                    "col0": col,
                    "row": row + 1,
                    "col_first": col == 0,
                    "col_last": col == cols - 1 or index == length - 1,
                })
                layer[loop.variable] = item
                layer["tablerowloop"] = info

                context.write(f'<td class="col{col + 1}">')
                control = context.render_body(node)
                context.write("</td>")
                if control is Control.BREAK:
                    break
        context.write("</tr>\n")
        return None

    return with_expressions(render, loop)


def compile_cycle(args: str) -> RenderFn:
    """
    {% cycle [group:] a, b, c %}

    Each evaluation writes the next value of the group; unnamed cycles
    are grouped by their argument text.
    """
    cycle = ExpressionParser().parse_statement(StatementSelector.CYCLE, args)

    def render(context: RenderContext) -> Optional[Control]:
        key = to_string(context.evaluate(cycle.group)) if cycle.group is not None else args
        positions = context.get_state(CYCLE_STATE)
        position = positions.get(key, 0)
        positions[key] = position + 1
        context.write(to_string(context.evaluate(cycle.values[position % len(cycle.values)])))
        return None

    return with_expressions(render, cycle)


def compile_break(args: str) -> RenderFn:
    def render(context: RenderContext) -> Optional[Control]:
        return Control.BREAK
    return render


def compile_continue(args: str) -> RenderFn:
    def render(context: RenderContext) -> Optional[Control]:
        return Control.CONTINUE
    return render


__all__ = [
    "iteration_items",
    "compile_for",
    "compile_tablerow",
    "compile_cycle",
    "compile_break",
    "compile_continue",
    "CYCLE_STATE",
]
