"""
Expression evaluator.

Walks an expression tree and computes its value against variable
bindings, using the filter registry and undefined-name policy of an
ExpressionConfig.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Protocol, cast

from ..values import MISSING, Shape, compare, convert, get_index, get_property, is_truthy
from .config import ExpressionConfig
from .errors import EvaluationError
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


class EvaluationContext(Protocol):
    """What an expression needs from its surroundings."""

    @property
    def config(self) -> ExpressionConfig:
        ...

    @property
    def bindings(self) -> Mapping[str, Any]:
        ...


@dataclass
class ExpressionContext:
    """
    Standalone evaluation context: a bindings mapping plus config.

    The render engine supplies its own context with layered scopes.
    """
    bindings: Dict[str, Any] = field(default_factory=dict)
    config: ExpressionConfig = field(default_factory=ExpressionConfig)


class ExpressionEvaluator:
    """
    Computes expression values.
    """

    def __init__(self, context: EvaluationContext):
        """
        Args:
            context: Bindings and config to evaluate against
        """
        self.context = context

    @property
    def config(self) -> ExpressionConfig:
        return self.context.config

    def evaluate(self, expr: Expression) -> Any:
        """
        Evaluates an expression tree.

        Args:
            expr: Root node

        Returns:
            Dynamic value

        Raises:
            UndefinedVariableError: Strict mode and a path does not resolve
            UndefinedFilterError: Strict mode and a filter is unknown
            FilterArgumentError, FilterError, ConversionError: From filter calls
            EvaluationError: For an unknown node kind
        """
        expr_type = expr.get_type()

        if expr_type == ExpressionType.LITERAL:
            return cast(LiteralExpr, expr).value
        elif expr_type == ExpressionType.VARIABLE:
            return self._evaluate_variable(cast(VariableExpr, expr))
        elif expr_type == ExpressionType.PROPERTY:
            return self._evaluate_property(cast(PropertyExpr, expr))
        elif expr_type == ExpressionType.INDEX:
            return self._evaluate_index(cast(IndexExpr, expr))
        elif expr_type == ExpressionType.RANGE:
            return self._evaluate_range(cast(RangeExpr, expr))
        elif expr_type == ExpressionType.COMPARISON:
            return self._evaluate_comparison(cast(ComparisonExpr, expr))
        elif expr_type == ExpressionType.AND:
            return self._evaluate_and(cast(LogicalExpr, expr))
        elif expr_type == ExpressionType.OR:
            return self._evaluate_or(cast(LogicalExpr, expr))
        elif expr_type == ExpressionType.FILTER:
            return self._evaluate_filter(cast(FilterExpr, expr))
        elif expr_type == ExpressionType.GROUP:
            return self.evaluate(cast(GroupExpr, expr).expr)
        else:
            raise EvaluationError(f"Unknown expression type: {expr_type}")

    def _evaluate_variable(self, expr: VariableExpr) -> Any:
        bindings = self.context.bindings
        if expr.name in bindings:
            return bindings[expr.name]
        return self.config.undefined_variable(expr.name)

    def _evaluate_property(self, expr: PropertyExpr) -> Any:
        target = self.evaluate(expr.target)
        result = get_property(target, expr.name)
        if result is MISSING:
            return self.config.undefined_variable(str(expr))
        return result

    def _evaluate_index(self, expr: IndexExpr) -> Any:
        target = self.evaluate(expr.target)
        key = self.evaluate(expr.index)
        result = get_index(target, key)
        if result is MISSING:
            return self.config.undefined_variable(str(expr))
        return result

    def _evaluate_range(self, expr: RangeExpr) -> Any:
        start = convert(self.evaluate(expr.start), Shape.INTEGER)
        end = convert(self.evaluate(expr.end), Shape.INTEGER)
        return range(start, end + 1)

    def _evaluate_comparison(self, expr: ComparisonExpr) -> bool:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        return compare(expr.operator, left, right)

    def _evaluate_and(self, expr: LogicalExpr) -> bool:
        return is_truthy(self.evaluate(expr.left)) and is_truthy(self.evaluate(expr.right))

    def _evaluate_or(self, expr: LogicalExpr) -> bool:
        return is_truthy(self.evaluate(expr.left)) or is_truthy(self.evaluate(expr.right))

    def _evaluate_filter(self, expr: FilterExpr) -> Any:
        value = self.evaluate(expr.target)
        spec = self.config.get_filter(expr.name)
        args = [self.evaluate(arg) for arg in expr.args]
        kwargs = {key: self.evaluate(arg) for key, arg in expr.kwargs}
        return spec.apply(value, args, kwargs)


def evaluate_expression_string(text: str, context: EvaluationContext) -> Any:
    """
    Convenience function: parse and evaluate expression text.

    Args:
        text: Expression source
        context: Evaluation context

    Returns:
        Dynamic value

    Raises:
        ExpressionSyntaxError: On parse errors
        EvaluationError: On evaluation errors
    """
    from .parser import ExpressionParser

    expr = ExpressionParser().parse(text)
    return ExpressionEvaluator(context).evaluate(expr)


__all__ = [
    "EvaluationContext",
    "ExpressionContext",
    "ExpressionEvaluator",
    "evaluate_expression_string",
]
