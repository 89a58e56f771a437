"""
increment / decrement tags.

Both tags share one counter table in the "counters" render state, keyed
by the tag argument text. A counter is independent of any variable with
the same name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..render.context import RenderContext
from ..render.control import Control
from ..render.nodes import RenderFn

COUNTERS_STATE = "counters"


@dataclass(frozen=True)
class CounterRule:
    """First value and step of a counter tag."""
    initial: int
    step: Callable[[int], int]


INCREMENT = CounterRule(initial=0, step=lambda n: n + 1)
DECREMENT = CounterRule(initial=-1, step=lambda n: n - 1)


def counter_compiler(rule: CounterRule) -> Callable[[str], RenderFn]:
    """Builds the compiler for a counter tag."""

    def compile_counter(args: str) -> RenderFn:
        name = args.strip()

        def render(context: RenderContext) -> Optional[Control]:
            counters = context.get_state(COUNTERS_STATE)
            count = rule.step(counters[name]) if name in counters else rule.initial
            counters[name] = count
            context.write(str(count))
            return None

        return render

    return compile_counter


__all__ = ["CounterRule", "INCREMENT", "DECREMENT", "counter_compiler", "COUNTERS_STATE"]
