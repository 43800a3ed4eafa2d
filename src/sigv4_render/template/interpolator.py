"""Variable placeholder substitution."""

import json
import re
from collections.abc import Mapping
from typing import Any

from .parser import PLACEHOLDER_PATTERN, is_whole_value, placeholder_path
from .paths import resolve_path
from .types import MISSING


def _json_key(key: Any) -> Any:
    return key if key is None or isinstance(key, (str, int, float)) else str(key)


def _json_ready(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {_json_key(key): _json_ready(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_ready(item) for item in value]
    return value


def to_json(value: Any) -> str:
    """Compact JSON text; non-ASCII characters are kept as-is.

    Mapping keys that JSON cannot represent are converted with ``str()``,
    other unsupported values likewise.
    """
    return json.dumps(_json_ready(value), separators=(",", ":"), ensure_ascii=False, default=str)


def to_text(value: Any) -> str:
    """Textual form of a value spliced into a larger string.

    Containers are JSON-encoded compactly; booleans and None use their JSON
    spelling so request bodies stay valid JSON. Absent values become "".
    """
    if value is MISSING:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list, tuple)):
        return to_json(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def render_variables(text: str, variables: Mapping[str, Any] | None) -> Any:
    """Substitute ``{{ path }}`` placeholders in text.

    If text is exactly one placeholder (ignoring surrounding whitespace),
    the resolved value is returned with its native type. Otherwise every
    placeholder is replaced left to right by its textual form; substituted
    text is not scanned again.

    Args:
        text: String that may contain placeholders
        variables: Variable mapping

    Returns:
        Native value for a whole-value placeholder, else a string
    """
    if is_whole_value(text):
        value = resolve_path(placeholder_path(text), variables)
        return "" if value is MISSING else value

    def _replace(match: re.Match[str]) -> str:
        return to_text(resolve_path(placeholder_path(match.group(0)), variables))

    return PLACEHOLDER_PATTERN.sub(_replace, text)
