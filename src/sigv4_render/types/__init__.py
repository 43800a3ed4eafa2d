"""Shared types for sigv4-render.

Import from here rather than submodules:
    from sigv4_render.types import LogLevel, ValidationResult
"""

from .enums import LogFormat, LogLevel
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
