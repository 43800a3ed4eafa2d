"""Template engine implementation."""

import logging
from collections.abc import Mapping
from typing import Any

from sigv4_render.errors import create_error
from sigv4_render.logging import RenderLogger

from .interpolator import render_variables
from .invoker import call_text, lookup_function
from .parser import has_templates, iter_calls
from .types import TemplateContext

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


class TemplateEngine:
    """Render template expressions in request values.

    Supports:
    - Variable access: {{ user.id }}, {{ items[0] }}, {{ data['key'] }}
    - Function calls with literal arguments: {{ $now() }}, {{ $pick('a', 1) }}
    - Type preservation when a string is exactly one variable placeholder

    Does NOT support:
    - Control flow (if/for)
    - Operators or nested calls
    - Variables as call arguments
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: RenderLogger | None = None,
    ) -> None:
        """Initialize template engine.

        Args:
            max_depth: Maximum number of call expansion passes per string
            logger: Optional render logger
        """
        if max_depth < 1:
            msg = f"max_depth must be positive, got {max_depth}"
            raise ValueError(msg)
        self.max_depth = max_depth
        self._logger = logger

    def render(self, value: Any, context: TemplateContext | Mapping[str, Any] | None = None) -> Any:
        """Render template expressions in a value.

        Mappings and lists/tuples are rebuilt with every string leaf rendered;
        other leaves are returned as-is. The input is never mutated.

        Args:
            value: Value that may contain {{ }} expressions
            context: Template context (or ``{"vars", "funcs"}`` mapping)

        Returns:
            Rendered value

        Raises:
            SigV4Error(TEMPLATE_RECURSION) if call re-expansion does not settle
        """
        if value is None:
            return None
        return self._render_value(value, TemplateContext.from_mapping(context))

    def render_string(self, template_str: str, context: TemplateContext) -> Any:
        """Render a single string.

        Call expressions are expanded first and the result is rendered
        again; once no registered call remains, variable placeholders are
        substituted.

        Args:
            template_str: String with {{ }} templates
            context: Template context

        Returns:
            Rendered value (native type for a whole-value variable placeholder)
        """
        return self._render_string(template_str, context, depth=0)

    def _render_value(self, value: Any, context: TemplateContext) -> Any:
        if isinstance(value, str):
            return self._render_string(value, context, depth=0)

        if isinstance(value, Mapping):
            return {k: self._render_value(v, context) for k, v in value.items()}

        if isinstance(value, list):
            return [self._render_value(item, context) for item in value]

        if isinstance(value, tuple):
            return tuple(self._render_value(item, context) for item in value)

        # Primitive types - return as-is
        return value

    def _render_string(self, text: str, context: TemplateContext, depth: int) -> Any:
        if not has_templates(text):
            return text

        expanded = self._expand_calls(text, context, depth)
        if expanded is not None:
            return self._render_string(expanded, context, depth + 1)

        return render_variables(text, context.vars)

    def _expand_calls(self, text: str, context: TemplateContext, depth: int) -> str | None:
        """Splice every registered call in text in one left-to-right pass.

        Results are not scanned during the pass; the caller renders the
        whole output again one level deeper.

        Returns:
            The spliced text, or None if no call in text is registered
        """
        pieces: list[str] = []
        copied = 0
        for call in iter_calls(text):
            if lookup_function(call, context) is None:
                if self._logger:
                    self._logger.call_unresolved(call.name)
                continue

            if depth >= self.max_depth:
                if self._logger:
                    self._logger.recursion_exceeded(text, self.max_depth)
                raise create_error(
                    "TEMPLATE_RECURSION",
                    max_depth=self.max_depth,
                    expression=call.name,
                )

            logger.debug("Expanding %s at depth %d", call.name, depth)
            if self._logger:
                self._logger.call_expanded(call.name, depth)
            pieces.append(text[copied : call.start])
            pieces.append(call_text(call, context))
            copied = call.end

        if not pieces:
            return None
        pieces.append(text[copied:])
        return "".join(pieces)


def render(
    value: Any,
    context: TemplateContext | Mapping[str, Any] | None = None,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any:
    """Render a value with a throwaway engine.

    Args:
        value: Value that may contain {{ }} expressions
        context: Template context (or ``{"vars", "funcs"}`` mapping)
        max_depth: Maximum number of call expansion passes per string

    Returns:
        Rendered value
    """
    return TemplateEngine(max_depth=max_depth).render(value, context)
