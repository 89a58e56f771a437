import io
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import pytest

from lq.filters import add_standard_filters
from lq.render import RenderConfig, render
from lq.tags import add_standard_tags


def _make_config() -> RenderConfig:
    config = RenderConfig()
    add_standard_filters(config)
    add_standard_tags(config)
    return config


@pytest.fixture
def config() -> RenderConfig:
    """Render config with the standard tags and filters."""
    return _make_config()


@pytest.fixture
def render_text(config: RenderConfig) -> Callable[..., str]:
    """Compiles and renders source with the config fixture."""

    def _render(source: str, bindings: Optional[Mapping[str, Any]] = None, state=None) -> str:
        root = config.compile(source)
        out = io.StringIO()
        render(root, out, bindings or {}, config, state)
        return out.getvalue()

    return _render


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Writes a UTF-8 file under tmp_path and returns its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def bindings() -> dict:
    """Bindings shared by tag and filter tests."""
    return {
        "x": 123,
        "obj": {"a": 1},
        "animals": ["zebra", "octopus", "giraffe", "Sally Snake"],
        "fruits": ["apples", "oranges", "peaches", "plums"],
        "pages": [
            {"name": "page 1", "category": "business"},
            {"name": "page 2", "category": "celebrities"},
            {"name": "page 3"},
            {"name": "page 4", "category": "lifestyle"},
            {"name": "page 5", "category": "sports"},
            {"name": "page 6"},
            {"name": "page 7", "category": "technology"},
        ],
        "page": {"title": "Introduction"},
        "empty_list": [],
        "empty_map": {},
        "string_with_newlines": "\nHello\nthere\n",
        "dup_ints": [1, 2, 1, 3],
        "dup_strings": ["one", "two", "one", "three"],
        "sort_prop": [{"weight": 1}, {"weight": 5}, {"weight": 3}, {"weight": None}],
        "mixed_case": ["c", "a", "B"],
    }
