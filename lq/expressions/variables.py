"""
Static analysis of expressions: which variable paths they read.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, cast

from .model import (
    ComparisonExpr,
    Expression,
    ExpressionType,
    FilterExpr,
    GroupExpr,
    IndexExpr,
    LiteralExpr,
    LogicalExpr,
    PropertyExpr,
    RangeExpr,
    VariableExpr,
)


def _static_path(expr: Expression) -> Optional[List[str]]:
    """
    Path of a chain of variable/property/literal-index accesses, or None
    when the chain involves something computed.
    """
    expr_type = expr.get_type()
    if expr_type == ExpressionType.VARIABLE:
        return [cast(VariableExpr, expr).name]
    if expr_type == ExpressionType.PROPERTY:
        prop = cast(PropertyExpr, expr)
        base = _static_path(prop.target)
        return base + [prop.name] if base is not None else None
    if expr_type == ExpressionType.INDEX:
        index = cast(IndexExpr, expr)
        base = _static_path(index.target)
        key = index.index
        if base is not None and key.get_type() == ExpressionType.LITERAL:
            value = cast(LiteralExpr, key).value
            if isinstance(value, str):
                return base + [value]
        return base
    return None


def find_variables(expr: Expression) -> Iterator[List[str]]:
    """
    Yields the variable paths an expression reads.

    a.b[0].c yields ["a", "b", "c"]: integer indices are skipped and
    string indices extend the path like properties. Computed indices
    are analysed as expressions of their own.

    Args:
        expr: Expression tree

    Yields:
        Paths as lists of names
    """
    path = _static_path(expr)
    if path is not None:
        yield path
        # computed indices inside the chain still read variables
        yield from _index_operands(expr)
        return

    expr_type = expr.get_type()
    if expr_type in (ExpressionType.PROPERTY, ExpressionType.INDEX):
        target = cast(PropertyExpr, expr).target
        yield from find_variables(target)
        if expr_type == ExpressionType.INDEX:
            yield from find_variables(cast(IndexExpr, expr).index)
    elif expr_type == ExpressionType.RANGE:
        rng = cast(RangeExpr, expr)
        yield from find_variables(rng.start)
        yield from find_variables(rng.end)
    elif expr_type == ExpressionType.COMPARISON:
        cmp = cast(ComparisonExpr, expr)
        yield from find_variables(cmp.left)
        yield from find_variables(cmp.right)
    elif expr_type in (ExpressionType.AND, ExpressionType.OR):
        logical = cast(LogicalExpr, expr)
        yield from find_variables(logical.left)
        yield from find_variables(logical.right)
    elif expr_type == ExpressionType.FILTER:
        flt = cast(FilterExpr, expr)
        yield from find_variables(flt.target)
        for arg in flt.args:
            yield from find_variables(arg)
        for _, arg in flt.kwargs:
            yield from find_variables(arg)
    elif expr_type == ExpressionType.GROUP:
        yield from find_variables(cast(GroupExpr, expr).expr)


def _index_operands(expr: Expression) -> Iterator[List[str]]:
    while expr.get_type() in (ExpressionType.PROPERTY, ExpressionType.INDEX):
        if expr.get_type() == ExpressionType.INDEX:
            index = cast(IndexExpr, expr).index
            if index.get_type() != ExpressionType.LITERAL:
                yield from find_variables(index)
        expr = cast(PropertyExpr, expr).target


__all__ = ["find_variables"]
