"""
Helpers shared by tag implementations.
"""

from __future__ import annotations

from typing import Optional, Union

from ..expressions.model import Expression, Statement
from ..render.nodes import RenderFn


def with_expressions(fn: RenderFn, *items: Optional[Union[Expression, Statement]]) -> RenderFn:
    """
    Records what a render function evaluates, for template variable analysis.

    Returns:
        The same function
    """
    fn.expressions = [item for item in items if item is not None]
    return fn


__all__ = ["with_expressions"]
