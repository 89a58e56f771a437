"""
Engine configuration loaded from YAML.

Example lq.yaml:

    delims: ["[[", "]]", "[%", "%]"]
    strict_variables: true
    strict_filters: true
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .parser.scanner import resolve_delims

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


@dataclass
class EngineConfig:
    """
    User-level engine settings.

    Attributes:
        delims: [object_left, object_right, tag_left, tag_right], or None for {{ }} and {% %}
        strict_variables: Undefined variables raise instead of rendering as nil
        strict_filters: Undefined filters raise instead of acting as identity
    """
    delims: Optional[List[str]] = None
    strict_variables: bool = False
    strict_filters: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EngineConfig:
        """
        Builds a config from a parsed mapping.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown engine config keys: {', '.join(map(str, unknown))}")

        delims = data.get("delims")
        if delims is not None:
            if not isinstance(delims, list) or not all(isinstance(d, str) for d in delims):
                raise ConfigError("delims must be a list of strings")
            try:
                resolve_delims(delims)
            except ValueError as e:
                raise ConfigError(str(e)) from e

        for flag in ("strict_variables", "strict_filters"):
            if flag in data and not isinstance(data[flag], bool):
                raise ConfigError(f"{flag} must be true or false")

        return cls(
            delims=list(delims) if delims else None,
            strict_variables=data.get("strict_variables", False),
            strict_filters=data.get("strict_filters", True),
        )


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file that must hold a mapping; a missing file is empty."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_engine_config(path: Path) -> EngineConfig:
    """
    Loads engine settings from a YAML file.

    Args:
        path: Config file; a missing file yields the defaults

    Returns:
        Engine config

    Raises:
        ConfigError: On invalid YAML, a non-mapping document or unknown keys
    """
    path = Path(path)
    raw = _read_yaml_map(path)
    if not raw:
        logger.debug("No engine config at %s, using defaults", path)
    return EngineConfig.from_dict(raw)


__all__ = ["EngineConfig", "load_engine_config"]
