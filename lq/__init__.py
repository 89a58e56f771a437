"""
lq: Liquid-style template engine.

    from lq import Engine

    engine = Engine()
    template = engine.parse_template("Hello {{ name | capitalize }}!")
    template.render({"name": "world"})  # "Hello World!"
"""

from __future__ import annotations

from .config import EngineConfig, load_engine_config
from .engine import Engine
from .errors import CompileError, ConfigError, LQError, RenderError, SourceError, TemplateSyntaxError
from .render.control import Control
from .template import Template
from .values import Shape
from .version import engine_version

__all__ = [
    "Engine",
    "Template",
    "EngineConfig",
    "load_engine_config",
    "Shape",
    "Control",
    "LQError",
    "ConfigError",
    "SourceError",
    "TemplateSyntaxError",
    "CompileError",
    "RenderError",
    "engine_version",
]
