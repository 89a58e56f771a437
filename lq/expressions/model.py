"""
Data model for expressions and tag statements.

Expression trees are immutable once parsed and may be evaluated any
number of times against different contexts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

if TYPE_CHECKING:
    from .evaluator import EvaluationContext


class ExpressionType(Enum):
    """Kinds of expression nodes."""
    LITERAL = "literal"
    VARIABLE = "variable"
    PROPERTY = "property"
    INDEX = "index"
    RANGE = "range"
    COMPARISON = "comparison"
    AND = "and"
    OR = "or"
    FILTER = "filter"
    GROUP = "group"


@dataclass(frozen=True)
class Expression(ABC):
    """Base class for all expression nodes."""

    @abstractmethod
    def get_type(self) -> ExpressionType:
        """Returns the node kind."""
        pass

    def evaluate(self, context: EvaluationContext) -> Any:
        """
        Evaluates the expression.

        Args:
            context: Bindings and expression config

        Returns:
            Dynamic value
        """
        from .evaluator import ExpressionEvaluator
        return ExpressionEvaluator(context).evaluate(self)

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass(frozen=True)
class LiteralExpr(Expression):
    """String, number, boolean or nil literal."""
    value: Any

    def get_type(self) -> ExpressionType:
        return ExpressionType.LITERAL

    def _to_string(self) -> str:
        if self.value is None:
            return "nil"
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, str):
            return repr(self.value)
        return str(self.value)


@dataclass(frozen=True)
class VariableExpr(Expression):
    """Top-level variable reference: name"""
    name: str

    def get_type(self) -> ExpressionType:
        return ExpressionType.VARIABLE

    def _to_string(self) -> str:
        return self.name


@dataclass(frozen=True)
class PropertyExpr(Expression):
    """Member access: target.name"""
    target: Expression
    name: str

    def get_type(self) -> ExpressionType:
        return ExpressionType.PROPERTY

    def _to_string(self) -> str:
        return f"{self.target}.{self.name}"


@dataclass(frozen=True)
class IndexExpr(Expression):
    """Subscript: target[index]"""
    target: Expression
    index: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.INDEX

    def _to_string(self) -> str:
        return f"{self.target}[{self.index}]"


@dataclass(frozen=True)
class RangeExpr(Expression):
    """
    Inclusive integer range: (start..end)

    Evaluates to a list; an end below the start gives an empty list.
    """
    start: Expression
    end: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.RANGE

    def _to_string(self) -> str:
        return f"({self.start}..{self.end})"


@dataclass(frozen=True)
class ComparisonExpr(Expression):
    """Comparison: left op right, where op includes contains."""
    left: Expression
    right: Expression
    operator: str

    def get_type(self) -> ExpressionType:
        return ExpressionType.COMPARISON

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


@dataclass(frozen=True)
class LogicalExpr(Expression):
    """
    Boolean connective: left and/or right

    Yields a boolean; the right side is evaluated only when needed.
    """
    left: Expression
    right: Expression
    operator: ExpressionType  # AND or OR

    def get_type(self) -> ExpressionType:
        return self.operator

    def _to_string(self) -> str:
        return f"{self.left} {self.operator.value} {self.right}"


@dataclass(frozen=True)
class FilterExpr(Expression):
    """
    Filter application: target | name: arg1, arg2, key: value
    """
    target: Expression
    name: str
    args: Tuple[Expression, ...] = ()
    kwargs: Tuple[Tuple[str, Expression], ...] = ()

    def get_type(self) -> ExpressionType:
        return ExpressionType.FILTER

    def _to_string(self) -> str:
        parts = [str(a) for a in self.args] + [f"{k}: {v}" for k, v in self.kwargs]
        if parts:
            return f"{self.target} | {self.name}: {', '.join(parts)}"
        return f"{self.target} | {self.name}"


@dataclass(frozen=True)
class GroupExpr(Expression):
    """Parenthesized expression: (expr)"""
    expr: Expression

    def get_type(self) -> ExpressionType:
        return ExpressionType.GROUP

    def _to_string(self) -> str:
        return f"({self.expr})"


# ---- Statements -------------------------------------------------------------

@dataclass(frozen=True)
class Statement:
    """Base class for parsed tag arguments with a fixed shape."""

    def expressions(self) -> List[Expression]:
        """Expressions the statement evaluates, for variable analysis."""
        return []


@dataclass(frozen=True)
class Assignment(Statement):
    """assign: variable = value"""
    variable: str
    value: Expression

    def expressions(self) -> List[Expression]:
        return [self.value]


@dataclass(frozen=True)
class Loop(Statement):
    """
    for/tablerow header: variable in expr [reversed] [limit: n] [offset: n] [cols: n]
    """
    variable: str
    expr: Expression
    reversed: bool = False
    limit: Optional[Expression] = None
    offset: Optional[Expression] = None
    cols: Optional[Expression] = None

    def expressions(self) -> List[Expression]:
        return [e for e in (self.expr, self.limit, self.offset, self.cols) if e is not None]


@dataclass(frozen=True)
class Cycle(Statement):
    """cycle: [group:] value1, value2, ..."""
    values: Tuple[Expression, ...] = field(default_factory=tuple)
    group: Optional[Expression] = None

    def expressions(self) -> List[Expression]:
        result = list(self.values)
        if self.group is not None:
            result.insert(0, self.group)
        return result


@dataclass(frozen=True)
class When(Statement):
    """when: value1, value2 or value3"""
    values: Tuple[Expression, ...] = field(default_factory=tuple)

    def expressions(self) -> List[Expression]:
        return list(self.values)


__all__ = [
    "ExpressionType",
    "Expression",
    "LiteralExpr",
    "VariableExpr",
    "PropertyExpr",
    "IndexExpr",
    "RangeExpr",
    "ComparisonExpr",
    "LogicalExpr",
    "FilterExpr",
    "GroupExpr",
    "Statement",
    "Assignment",
    "Loop",
    "Cycle",
    "When",
]
