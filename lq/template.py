"""
Compiled template handle.
"""

from __future__ import annotations

import io
from typing import Any, Mapping, MutableMapping, Optional

from .render.analysis import VariableTree, find_variables
from .render.config import RenderConfig
from .render.context import Writer
from .render.nodes import Node
from .render.renderer import render


class Template:
    """
    A parsed and compiled template.

    Immutable: the same Template may be rendered any number of times,
    also concurrently, as every render gets its own context.
    """

    def __init__(self, root: Node, config: RenderConfig):
        self.root = root
        self.config = config

    def render(
        self,
        bindings: Optional[Mapping[str, Any]] = None,
        state: Optional[MutableMapping[str, Any]] = None,
    ) -> str:
        """
        Renders to a string.

        Args:
            bindings: Template variables
            state: Tag state to carry across renders (counters, cycles)

        Raises:
            RenderError: On evaluation or tag failures
        """
        buffer = io.StringIO()
        self.render_to(buffer, bindings, state)
        return buffer.getvalue()

    def render_to(
        self,
        out: Writer,
        bindings: Optional[Mapping[str, Any]] = None,
        state: Optional[MutableMapping[str, Any]] = None,
    ) -> None:
        """Renders into any object with write(str)."""
        render(self.root, out, bindings, self.config, state)

    def find_variables(self) -> VariableTree:
        """
        Variable paths the template reads, as a nested dict.

        {{ page.title }} {{ site }} gives {"page": {"title": {}}, "site": {}}.
        """
        return find_variables(self.root)


__all__ = ["Template"]
