"""
Filter registration and invocation.

A filter is a plain Python function whose first parameter receives the
piped value. Parameter shapes declared at registration drive conversion
of the piped value and positional arguments; keyword arguments are
passed through unchanged.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..errors import LQError
from ..values import Shape, convert
from .errors import FilterArgumentError, FilterError


def _signature_of(func: Callable[..., Any]) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        # Some builtins expose no signature; their arity is checked by the call itself
        return None


@dataclass(frozen=True)
class FilterSpec:
    """
    Registered filter.

    Attributes:
        name: Filter name used in templates
        func: Implementation; func(value, *args, **kwargs)
        shapes: Shapes of value and positional arguments, in order.
                Parameters beyond the list are converted with Shape.ANY.
    """
    name: str
    func: Callable[..., Any]
    shapes: Tuple[Shape, ...] = ()
    signature: Optional[inspect.Signature] = field(default=None, compare=False, repr=False)

    @classmethod
    def create(cls, name: str, func: Callable[..., Any], shapes: Sequence[Shape] = ()) -> FilterSpec:
        return cls(name=name, func=func, shapes=tuple(shapes), signature=_signature_of(func))

    def shape_at(self, index: int) -> Shape:
        return self.shapes[index] if index < len(self.shapes) else Shape.ANY

    def apply(self, value: Any, args: Sequence[Any] = (), kwargs: Optional[Dict[str, Any]] = None) -> Any:
        """
        Calls the filter.

        Args:
            value: Piped value
            args: Evaluated positional arguments
            kwargs: Evaluated keyword arguments

        Returns:
            Filter result

        Raises:
            FilterArgumentError: If the function cannot accept the arguments
            ConversionError: If a value cannot take its declared shape
            FilterError: If the function raised anything else
        """
        kwargs = kwargs or {}
        positional: List[Any] = [value, *args]

        if self.signature is not None:
            try:
                self.signature.bind(*positional, **kwargs)
            except TypeError as e:
                raise FilterArgumentError(self.name, str(e)) from e

        converted = [convert(item, self.shape_at(i)) for i, item in enumerate(positional)]

        try:
            return self.func(*converted, **kwargs)
        except LQError:
            raise
        except Exception as e:
            raise FilterError(self.name, e) from e


def _identity(value: Any, *args: Any, **kwargs: Any) -> Any:
    return value


# Stand-in for unknown filters when undefined filters are lax
IDENTITY_FILTER = FilterSpec.create("identity", _identity)


__all__ = ["FilterSpec", "IDENTITY_FILTER"]
