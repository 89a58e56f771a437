"""
Compile and render templates.

RenderConfig holds tag and block compilers, Compiler binds parsed tags
to render functions, render() walks the result with a RenderContext.
"""

from __future__ import annotations

from .analysis import find_variables
from .compiler import Compiler
from .config import BlockDefinition, BlockRole, RenderConfig
from .context import RenderContext
from .control import Control
from .nodes import BlockNode, Node, ObjectNode, RawNode, RenderFn, SeqNode, TagNode, TextNode
from .renderer import render, render_node, render_nodes

__all__ = [
    "RenderConfig",
    "BlockDefinition",
    "BlockRole",
    "Compiler",
    "RenderContext",
    "Control",
    "RenderFn",
    "Node",
    "SeqNode",
    "TextNode",
    "ObjectNode",
    "TagNode",
    "BlockNode",
    "RawNode",
    "render",
    "render_node",
    "render_nodes",
    "find_variables",
]
