"""
Render walk over a compiled tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, MutableMapping, Optional

from ..errors import LQError, RenderError
from ..values import to_output_string
from .control import Control
from .nodes import BlockNode, Node, ObjectNode, RawNode, SeqNode, TagNode, TextNode

if TYPE_CHECKING:
    from .config import RenderConfig
    from .context import RenderContext, Writer

logger = logging.getLogger(__name__)


def render_nodes(nodes: Iterable[Node], context: RenderContext) -> Optional[Control]:
    """
    Renders nodes in order.

    Stops at the first control signal and returns it unchanged.
    """
    for node in nodes:
        control = render_node(node, context)
        if control is not None:
            return control
    return None


def render_node(node: Node, context: RenderContext) -> Optional[Control]:
    """
    Renders one node.

    Errors raised below an object, tag or block are re-raised as
    RenderError located at that node; an error already located deeper
    in the tree passes through unchanged.

    Raises:
        RenderError: On evaluation, conversion or tag failures
    """
    if isinstance(node, TextNode):
        context.write(node.text)
        return None
    if isinstance(node, SeqNode):
        return render_nodes(node.children, context)
    if isinstance(node, RawNode):
        for piece in node.slices:
            context.write(piece)
        return None

    previous = context.node
    context.node = node
    try:
        if isinstance(node, ObjectNode):
            context.write(to_output_string(context.evaluate(node.expr)))
            return None
        if isinstance(node, (TagNode, BlockNode)):
            if node.renderer is None:
                raise RenderError(f'block "{node.name}" has no renderer', node.loc)
            return node.renderer(context)
        raise TypeError(f"Unknown node type: {type(node).__name__}")
    except RenderError:
        raise
    except LQError as e:
        raise RenderError(str(e), node.loc, cause=e) from e
    except RecursionError as e:
        raise RenderError("nesting too deep", node.loc, cause=e) from e
    finally:
        context.node = previous


def render(
    node: Node,
    out: Writer,
    bindings: Optional[Mapping[str, Any]],
    config: RenderConfig,
    state: Optional[MutableMapping[str, Any]] = None,
) -> None:
    """
    Renders a compiled tree to a writer.

    Args:
        node: Compiled template
        out: Any object with write(str)
        bindings: Top-level variables; copied, never modified
        config: Config the tree was compiled with
        state: Auxiliary tag state; shared with the caller when given

    Raises:
        RenderError: On the first failing node; output written so far stays written
    """
    from .context import RenderContext

    context = RenderContext(config, bindings, state=state, out=out)
    control = render_node(node, context)
    if control is not None:
        logger.debug("Render stopped by top-level %s", control.value)


__all__ = ["render", "render_node", "render_nodes"]
