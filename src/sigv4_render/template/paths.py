"""Dotted/bracketed path resolution against variable mappings."""

from collections.abc import Mapping, Sequence
from typing import Any

from .types import MISSING


def split_path(path: str) -> list[str]:
    """Split a path like ``a.b[0]['c d']`` into segments.

    Quoted bracket keys keep their inner text verbatim; empty segments from
    doubled dots are dropped.

    Args:
        path: Path expression (already trimmed)

    Returns:
        List of key/index segments, as strings
    """
    segments: list[str] = []
    current: list[str] = []
    i = 0
    n = len(path)

    def flush() -> None:
        if current:
            segments.append("".join(current))
            current.clear()

    while i < n:
        char = path[i]
        if char == ".":
            flush()
            i += 1
        elif char == "[":
            flush()
            close = path.find("]", i + 1)
            if close == -1:
                # Unbalanced bracket: keep the rest as a plain key
                current.append(path[i:])
                break
            inner = path[i + 1 : close].strip()
            if len(inner) >= 2 and inner[0] == inner[-1] and inner[0] in "'\"":
                inner = inner[1:-1]
            segments.append(inner)
            i = close + 1
        else:
            current.append(char)
            i += 1

    flush()
    return segments


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        if segment in current:
            return current[segment]
        if segment.isdigit() and int(segment) in current:
            return current[int(segment)]
        return MISSING

    if isinstance(current, Sequence):
        if not segment.isdigit():
            return MISSING
        index = int(segment)
        return current[index] if index < len(current) else MISSING

    if segment.startswith("_") or current is None:
        return MISSING
    return getattr(current, segment, MISSING)


def resolve_path(path: str, variables: Mapping[str, Any] | None) -> Any:
    """Resolve a variable path against a mapping.

    A path that is itself a key of ``variables`` wins over splitting, so
    flat keys such as ``"user.id"`` resolve directly.

    Args:
        path: Path text, e.g. ``" user.tags[0] "``
        variables: Variable mapping (``None`` treated as empty)

    Returns:
        Resolved value, or MISSING if any segment is absent
    """
    if not variables:
        return MISSING

    path = path.strip()
    if path in variables:
        return variables[path]

    segments = split_path(path)
    if not segments:
        return MISSING

    current: Any = variables
    for segment in segments:
        current = _step(current, segment)
        if current is MISSING:
            return MISSING
    return current
