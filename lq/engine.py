"""
Engine facade: one configured set of tags, filters and modes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .config import EngineConfig
from .expressions.config import UndefinedMode
from .filters import add_standard_filters
from .parser.scanner import resolve_delims
from .parser.tokens import SourceLoc
from .render.config import BlockDefinition, RenderConfig, TagCompiler
from .tags import add_standard_tags
from .template import Template
from .values import Shape

logger = logging.getLogger(__name__)


class Engine:
    """
    Parses templates with the standard tags and filters plus any the
    caller registers.

    Configure first, then parse: registration while templates are being
    rendered is not supported.

    Example:
        engine = Engine()
        engine.register_filter("shout", lambda s: s.upper() + "!", Shape.STRING)
        engine.parse_and_render("{{ greeting | shout }}", {"greeting": "hi"})  # "HI!"
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = RenderConfig()
        add_standard_filters(self.config)
        add_standard_tags(self.config)

        if config is not None:
            if config.delims:
                self.delims(*config.delims)
            if config.strict_variables:
                self.strict_variables()
            if not config.strict_filters:
                self.lax_filters()

    # ---- Configuration ------------------------------------------------------

    def register_filter(self, name: str, func: Callable[..., Any], *shapes: Shape) -> None:
        """
        Defines a filter.

        Args:
            name: Name used after '|'
            func: func(value, *args, **kwargs)
            *shapes: Shapes the piped value and positional arguments are converted to
        """
        self.config.add_filter(name, func, *shapes)

    def register_tag(self, name: str, compiler: TagCompiler) -> None:
        """Defines a tag without body; compiler(args) returns its render function."""
        self.config.add_tag(name, compiler)

    def register_block(self, name: str) -> BlockDefinition:
        """Defines a block tag; chain .clause() and .compiler() on the result."""
        return self.config.add_block(name)

    def strict_variables(self) -> None:
        """Undefined variables raise instead of rendering as nil."""
        self.config.undefined_variables = UndefinedMode.STRICT

    def lax_filters(self) -> None:
        """Undefined filters pass their input through instead of raising."""
        self.config.undefined_filters = UndefinedMode.LAX

    def delims(self, object_left: str = "", object_right: str = "", tag_left: str = "", tag_right: str = "") -> None:
        """
        Replaces the object and tag delimiters; all empty restores the defaults.

        Raises:
            ValueError: For an incomplete set or identical left delimiters
        """
        markers = [object_left, object_right, tag_left, tag_right]
        if not any(markers):
            self.config.delims = None
            return
        self.config.delims = list(resolve_delims(markers))

    # ---- Parsing ------------------------------------------------------------

    def parse_template(self, source: str, path: str = "", line: int = 1) -> Template:
        """
        Parses and compiles template source.

        Args:
            source: Template text
            path: Name reported in errors; also the base for include paths
            line: Line number of the first source line

        Raises:
            TemplateSyntaxError: On syntax errors
            CompileError: On unknown tags or invalid tag arguments
        """
        root = self.config.compile(source, SourceLoc(pathname=path, line_no=line))
        return Template(root, self.config)

    def parse_template_file(self, path: Path) -> Template:
        """
        Parses a template file.

        Raises:
            OSError: If the file cannot be read
            TemplateSyntaxError, CompileError: As for parse_template
        """
        path = Path(path)
        logger.debug("Parsing template file %s", path)
        return self.parse_template(path.read_text(encoding="utf-8"), path=str(path))

    def parse_and_render(self, source: str, bindings: Optional[Mapping[str, Any]] = None) -> str:
        """Parses, compiles and renders in one call."""
        return self.parse_template(source).render(bindings)


__all__ = ["Engine"]
