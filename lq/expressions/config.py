"""
Expression configuration: filter registry and undefined-name policy.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from ..values import Shape
from .errors import UndefinedFilterError, UndefinedVariableError
from .filters import IDENTITY_FILTER, FilterSpec

logger = logging.getLogger(__name__)


class UndefinedMode(enum.Enum):
    """How to treat names that do not resolve."""
    STRICT = "strict"   # raise
    LAX = "lax"         # substitute nil / identity


@dataclass
class ExpressionConfig:
    """
    Settings consulted while evaluating expressions.

    Built once by the engine, then treated as read-only.
    """
    filters: Dict[str, FilterSpec] = field(default_factory=dict)
    undefined_variables: UndefinedMode = UndefinedMode.LAX
    undefined_filters: UndefinedMode = UndefinedMode.STRICT

    def add_filter(self, name: str, func: Callable[..., Any], *shapes: Shape) -> None:
        """
        Registers a filter, replacing any filter with the same name.

        Args:
            name: Name used after '|'
            func: func(value, *args, **kwargs)
            *shapes: Shapes of the piped value and positional arguments
        """
        if name in self.filters:
            logger.warning("Filter '%s' is already registered; replacing it", name)
        self.filters[name] = FilterSpec.create(name, func, shapes)

    def get_filter(self, name: str) -> FilterSpec:
        """
        Looks up a filter, applying the undefined-filter mode.

        Raises:
            UndefinedFilterError: Strict mode and the name is unknown
        """
        spec = self.filters.get(name)
        if spec is not None:
            return spec
        if self.undefined_filters is UndefinedMode.STRICT:
            raise UndefinedFilterError(name)
        logger.debug("Undefined filter '%s' treated as identity", name)
        return IDENTITY_FILTER

    def undefined_variable(self, name: str) -> Any:
        """
        Value for an unresolved variable path.

        Raises:
            UndefinedVariableError: Strict mode
        """
        if self.undefined_variables is UndefinedMode.STRICT:
            raise UndefinedVariableError(name)
        logger.debug("Undefined variable '%s' evaluates to nil", name)
        return None


__all__ = ["UndefinedMode", "ExpressionConfig"]
