"""Template engine type definitions."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


class _Missing:
    """Marker for a path that does not resolve."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class TemplateContext:
    """Variables and functions available to one render pass.

    Access patterns:
    - {{ user.id }} → vars["user"]["id"]
    - {{ items[0] }} → vars["items"][0]
    - {{ $now() }} → funcs["$now"]()
    """

    vars: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    funcs: Mapping[str, Callable[..., Any]] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def from_mapping(cls, data: Any) -> "TemplateContext":
        """Build a context from a ``{"vars": ..., "funcs": ...}`` mapping.

        Missing or ``None`` entries become empty mappings. An existing
        TemplateContext is returned unchanged.
        """
        if isinstance(data, TemplateContext):
            return data
        if not isinstance(data, Mapping):
            return cls()
        return cls(vars=data.get("vars") or _EMPTY, funcs=data.get("funcs") or _EMPTY)


@dataclass(frozen=True)
class ParsedCall:
    """A call expression found in a string.

    ``start``/``end`` delimit the whole placeholder (braces included) in the
    source text, so the invoker can splice the result over it.
    """

    name: str  # Includes the sigil, e.g. "$now"
    args: tuple[Any, ...]
    start: int
    end: int
