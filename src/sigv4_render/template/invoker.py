"""Template function invocation."""

from typing import Any

from .interpolator import to_text
from .types import ParsedCall, TemplateContext


def lookup_function(call: ParsedCall, context: TemplateContext) -> Any:
    """Return the function registered for a call, or None."""
    return context.funcs.get(call.name) if context.funcs else None


def call_text(call: ParsedCall, context: TemplateContext) -> str:
    """Invoke a registered call and return its result as text (None → "")."""
    result = lookup_function(call, context)(*call.args)
    return "" if result is None else to_text(result)


def render_call(text: str, call: ParsedCall, context: TemplateContext) -> str:
    """Invoke a call expression and splice its result into text.

    Unknown functions leave text unchanged. The returned string is not
    rendered further here; the engine re-renders it.

    Args:
        text: Source string containing the call placeholder
        call: Parsed call (name, literal args, span)
        context: Template context providing ``funcs``

    Returns:
        Text with the call placeholder replaced by the function's result
    """
    if lookup_function(call, context) is None:
        return text
    return text[: call.start] + call_text(call, context) + text[call.end :]
