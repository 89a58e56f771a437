"""
Standard tag catalog.
"""

from __future__ import annotations

from ..render.config import RenderConfig
from .control_flow import compile_case, if_compiler
from .counters import DECREMENT, INCREMENT, counter_compiler
from .iteration import (
    compile_break,
    compile_continue,
    compile_cycle,
    compile_for,
    compile_tablerow,
)
from .variables import compile_assign, compile_capture, compile_include, compile_nothing


def add_standard_tags(config: RenderConfig) -> None:
    """
    Registers the standard tags and blocks.

    comment and raw are only recognized by the parser once they are
    registered as blocks.
    """
    config.add_tag("assign", compile_assign)
    config.add_tag("include", compile_include)
    config.add_tag("increment", counter_compiler(INCREMENT))
    config.add_tag("decrement", counter_compiler(DECREMENT))
    config.add_tag("break", compile_break)
    config.add_tag("continue", compile_continue)
    config.add_tag("cycle", compile_cycle)

    config.add_block("capture").compiler(compile_capture)
    config.add_block("case").clause("when").clause("else").compiler(compile_case)
    config.add_block("comment").compiler(compile_nothing)
    config.add_block("for").clause("else").compiler(compile_for)
    config.add_block("if").clause("else").clause("elsif").compiler(if_compiler(True))
    config.add_block("raw").compiler(compile_nothing)
    config.add_block("tablerow").compiler(compile_tablerow)
    config.add_block("unless").clause("else").clause("elsif").compiler(if_compiler(False))


__all__ = ["add_standard_tags"]
