"""
Service name and version stamped on JSON log lines.

Installed distribution metadata is preferred; from a source checkout the
nearest pyproject.toml is read instead.
"""

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

DISTRIBUTION_NAME = "member-registry"
_MISSING = object()


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    """Walk up from `start` (at most `max_up` levels) looking for pyproject.toml."""
    for directory in [start, *start.parents][:max_up]:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def get_pyproject_value(
    key: str,
    start: str | Path | None = None,
    max_up: int = 5,
    default: Any = None,
) -> Any:
    """
    Look up a dotted `key` such as "project.version" in the nearest
    pyproject.toml. `default` when there is no file, it does not parse,
    or the key is absent.
    """
    origin = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    pyproject = find_pyproject(origin, max_up=max_up)
    if pyproject is None or not key:
        return default

    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return default

    node: Any = data
    for part in key.split("."):
        node = node.get(part, _MISSING) if isinstance(node, dict) else _MISSING
        if node is _MISSING:
            return default
    return node


def get_project_name(default: str | None = None) -> str | None:
    return get_pyproject_value("project.name", default=default)


def get_project_version(default: str = "unknown") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return get_pyproject_value("project.version", default=default)


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
