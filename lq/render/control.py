"""
Loop control signals.

Render functions return a signal instead of raising: every node that
renders a body checks the result and hands it up unchanged until a loop
consumes it.
"""

from __future__ import annotations

import enum


class Control(enum.Enum):
    """Non-local exit from a loop body."""
    BREAK = "break"
    CONTINUE = "continue"


__all__ = ["Control"]
