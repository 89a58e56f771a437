"""
Expressions used in {{ objects }} and tag arguments.

Public API:
- ExpressionParser / parse_expression: text -> Expression tree
- parse_statement: assign/loop/cycle/when tag arguments
- ExpressionEvaluator / Expression.evaluate: tree -> value
- ExpressionConfig: filter registry and undefined-name modes
"""

from __future__ import annotations

from .config import ExpressionConfig, UndefinedMode
from .errors import (
    EvaluationError,
    ExpressionSyntaxError,
    FilterArgumentError,
    FilterError,
    UndefinedFilterError,
    UndefinedVariableError,
)
from .evaluator import EvaluationContext, ExpressionContext, ExpressionEvaluator, evaluate_expression_string
from .filters import FilterSpec
from .model import Assignment, Cycle, Expression, Loop, Statement, When
from .parser import ExpressionParser, StatementSelector, parse_expression, parse_statement
from .variables import find_variables

__all__ = [
    "Expression",
    "Statement",
    "Assignment",
    "Loop",
    "Cycle",
    "When",
    "ExpressionParser",
    "StatementSelector",
    "parse_expression",
    "parse_statement",
    "ExpressionEvaluator",
    "EvaluationContext",
    "ExpressionContext",
    "evaluate_expression_string",
    "ExpressionConfig",
    "UndefinedMode",
    "FilterSpec",
    "find_variables",
    "ExpressionSyntaxError",
    "EvaluationError",
    "UndefinedVariableError",
    "UndefinedFilterError",
    "FilterArgumentError",
    "FilterError",
]
