"""
Error hierarchy for template processing.

Every failure caused by template text, bindings or engine settings
derives from LQError: syntax problems while parsing, unknown tags while
compiling, undefined references and failing filters while rendering.
Bugs in the engine itself are left as ordinary exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .parser.tokens import SourceLoc


class LQError(Exception):
    """
    Base class for all user-facing errors in lq.

    These errors indicate problems in templates, bindings or configuration
    that the template author can fix.
    """
    pass


class ConfigError(LQError):
    """Invalid engine configuration."""
    pass


class SourceError(LQError):
    """
    Error tied to a location in template source.

    Attributes:
        message: Bare message without location prefix
        loc: Source location of the token that caused the error
        cause: Original exception, if this error wraps another one
    """

    kind = "Liquid"

    def __init__(self, message: str, loc: Optional[SourceLoc] = None, cause: Optional[BaseException] = None):
        self.message = message
        self.loc = loc
        self.cause = cause
        super().__init__(self._format())

    @property
    def path(self) -> str:
        return self.loc.pathname if self.loc is not None else ""

    @property
    def line_no(self) -> int:
        return self.loc.line_no if self.loc is not None else 0

    def _format(self) -> str:
        where = ""
        if self.path:
            where += f" in {self.path}"
        if self.line_no > 0:
            where += f" (line {self.line_no})"
        return f"{self.kind} error{where}: {self.message}"


class TemplateSyntaxError(SourceError):
    """Scanning or structural parsing failed; no AST is produced."""
    kind = "Syntax"


class CompileError(SourceError):
    """A tag has no compiler, or a compiler callback rejected its arguments."""
    kind = "Compile"


class RenderError(SourceError):
    """Rendering failed at a node; output written so far is kept."""
    kind = "Render"


__all__ = [
    "LQError",
    "ConfigError",
    "SourceError",
    "TemplateSyntaxError",
    "CompileError",
    "RenderError",
]
