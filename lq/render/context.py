"""
Per-render mutable state.

One RenderContext is created per top-level render call and threaded
through the walk. Bindings are a chain of scopes: tags push a local
layer for loop variables, while assign/capture write to the root layer
so values survive the block that set them.
"""

from __future__ import annotations

import io
import logging
from collections import ChainMap
from contextlib import contextmanager
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Protocol,
    Union,
)

from ..errors import RenderError
from ..expressions.model import Expression
from ..expressions.parser import ExpressionParser
from ..parser.tokens import SourceLoc
from .control import Control
from .nodes import BlockNode, Node
from .renderer import render_node, render_nodes

if TYPE_CHECKING:
    from .config import RenderConfig

logger = logging.getLogger(__name__)

# Nested include levels allowed before rendering fails
MAX_INCLUDE_DEPTH = 50


class Writer(Protocol):
    """Output sink."""

    def write(self, text: str) -> Any:
        ...


class RenderContext:
    """
    Bindings, tag state and output position of one render call.
    """

    def __init__(
        self,
        config: RenderConfig,
        bindings: Optional[Mapping[str, Any]] = None,
        state: Optional[MutableMapping[str, Any]] = None,
        out: Optional[Writer] = None,
    ):
        """
        Args:
            config: Render config (filters, modes, tags)
            bindings: Top-level variables, copied into the root scope
            state: Auxiliary tag state; used as is so the caller can carry it
                   across renders
            out: Output sink; defaults to an in-memory buffer
        """
        self.config = config
        self._scopes: ChainMap = ChainMap(dict(bindings or {}))
        self.state: MutableMapping[str, Any] = state if state is not None else {}
        self._outputs: List[Writer] = [out if out is not None else io.StringIO()]
        self.node: Optional[Node] = None
        self.include_depth = 0

    # ---- Bindings -----------------------------------------------------------

    @property
    def bindings(self) -> Mapping[str, Any]:
        """Visible variables, innermost scope first."""
        return self._scopes

    def get(self, name: str, default: Any = None) -> Any:
        return self._scopes.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Sets a variable in the root scope."""
        self._scopes.maps[-1][name] = value

    @contextmanager
    def scope(self, variables: Optional[Mapping[str, Any]] = None) -> Iterator[Dict[str, Any]]:
        """
        Pushes a local scope for the duration of the block.

        Yields:
            The local layer, for updating loop variables in place
        """
        layer: Dict[str, Any] = dict(variables or {})
        self._scopes = self._scopes.new_child(layer)
        try:
            yield layer
        finally:
            self._scopes = self._scopes.parents

    # ---- Expressions --------------------------------------------------------

    def evaluate(self, expr: Expression) -> Any:
        return expr.evaluate(self)

    def evaluate_string(self, source: str) -> Any:
        """Parses and evaluates expression text in this context."""
        return ExpressionParser().parse(source).evaluate(self)

    # ---- Tag state ----------------------------------------------------------

    def get_state(self, key: str, factory: Callable[[], Any] = dict) -> Any:
        """
        Returns the auxiliary state stored under key, creating it on first use.

        Args:
            key: Stable name chosen by the tag implementation
            factory: Creates the initial value
        """
        if key not in self.state:
            self.state[key] = factory()
        return self.state[key]

    # ---- Output -------------------------------------------------------------

    def write(self, text: str) -> None:
        if text:
            self._outputs[-1].write(text)

    def render_body(self, node: BlockNode) -> Optional[Control]:
        """Renders the body of a block or clause into the current output."""
        return render_nodes(node.body, self)

    def render_node(self, node: Node) -> Optional[Control]:
        return render_node(node, self)

    def render_to_string(self, target: Union[Node, List[Node]]) -> str:
        """
        Renders into a separate buffer and returns the text.

        A control signal inside the captured nodes ends the capture early.
        """
        buffer = io.StringIO()
        self._outputs.append(buffer)
        try:
            if isinstance(target, BlockNode):
                render_nodes(target.body, self)
            elif isinstance(target, list):
                render_nodes(target, self)
            else:
                render_node(target, self)
        finally:
            self._outputs.pop()
        return buffer.getvalue()

    @property
    def source_loc(self) -> SourceLoc:
        """Location of the node being rendered."""
        return self.node.loc if self.node is not None else SourceLoc()

    def render_file(self, filename: str) -> str:
        """
        Compiles and renders another template file with the current bindings.

        The path is resolved relative to the directory of the template being
        rendered. Assignments made by the other file do not leak back; tag
        state is shared.

        Raises:
            RenderError: If the file cannot be read or includes nest deeper than MAX_INCLUDE_DEPTH
            TemplateSyntaxError, CompileError: If it does not compile
        """
        if self.include_depth >= MAX_INCLUDE_DEPTH:
            raise RenderError(
                f"include depth limit of {MAX_INCLUDE_DEPTH} exceeded by {filename}", self.source_loc
            )

        path = Path(filename)
        current = self.source_loc.pathname
        if not path.is_absolute() and current:
            path = Path(current).parent / path

        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise RenderError(f"can't read {filename}: {e.strerror or e}", self.source_loc, cause=e) from e

        logger.debug("Rendering file %s", path)
        node = self.config.compile(source, SourceLoc(pathname=str(path), line_no=1))
        nested = RenderContext(self.config, dict(self._scopes), state=self.state)
        nested.include_depth = self.include_depth + 1
        return nested.render_to_string(node)


__all__ = ["RenderContext", "Writer", "MAX_INCLUDE_DEPTH"]
