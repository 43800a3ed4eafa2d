"""Template engine for request parameters."""

from .engine import DEFAULT_MAX_DEPTH, TemplateEngine, render
from .interpolator import render_variables, to_json, to_text
from .invoker import render_call
from .parser import try_parse_call
from .paths import resolve_path
from .types import MISSING, ParsedCall, TemplateContext

__all__ = [
    "TemplateEngine",
    "TemplateContext",
    "ParsedCall",
    "MISSING",
    "DEFAULT_MAX_DEPTH",
    "render",
    "render_variables",
    "render_call",
    "try_parse_call",
    "resolve_path",
    "to_text",
    "to_json",
]
