from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Version of the installed distribution.
    Independent of the other modules to avoid import cycles.
    """
    try:
        return metadata.version("markpage")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
