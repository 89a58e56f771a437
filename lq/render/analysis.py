"""
Static analysis of compiled templates.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Union

from ..expressions.model import Expression, Statement
from ..expressions.variables import find_variables as find_expression_variables
from .nodes import BlockNode, Node, ObjectNode, SeqNode, TagNode

VariableTree = Dict[str, Any]


def _node_expressions(node: Node) -> Iterator[Union[Expression, Statement]]:
    """Expressions read by a node and everything under it, in source order."""
    pending: List[Node] = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, SeqNode):
            pending.extend(reversed(current.children))
        elif isinstance(current, ObjectNode):
            yield current.expr
        elif isinstance(current, TagNode):
            yield from getattr(current.renderer, "expressions", ())
        elif isinstance(current, BlockNode):
            yield from getattr(current.renderer, "expressions", ())
            pending.extend(reversed(current.clauses))
            pending.extend(reversed(current.body))


def _flatten(items: Iterable[Union[Expression, Statement]]) -> Iterator[Expression]:
    for item in items:
        if isinstance(item, Statement):
            yield from item.expressions()
        else:
            yield item


def find_variables(node: Node) -> VariableTree:
    """
    Collects the variable paths a template reads.

    Tag render functions expose the expressions they evaluate through an
    "expressions" attribute (expressions or statements); objects
    contribute their own expression. Paths are merged into a tree:
    {{ a.b }} {{ a.c }} {{ d }} gives {"a": {"b": {}, "c": {}}, "d": {}}.

    Args:
        node: Compiled template

    Returns:
        Nested dict of variable names
    """
    tree: VariableTree = {}
    for expr in _flatten(_node_expressions(node)):
        for path in find_expression_variables(expr):
            _merge_path(tree, path)
    return tree


def _merge_path(tree: VariableTree, path: List[str]) -> None:
    current = tree
    for name in path:
        current = current.setdefault(name, {})


__all__ = ["find_variables", "VariableTree"]
