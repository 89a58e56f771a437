from __future__ import annotations

from importlib import metadata


def engine_version() -> str:
    """
    Version of the installed distribution.
    Imports nothing else from the package, so any module may use it.
    """
    try:
        return metadata.version("lq-templates")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["engine_version"]
