"""Structured errors with context."""

from .errors import ErrorCategory, SigV4Error
from .factory import create_error, credentials_error, get_registry, signing_error
from .registry import ErrorRegistry, ErrorTemplate

__all__ = [
    "SigV4Error",
    "ErrorCategory",
    "ErrorTemplate",
    "ErrorRegistry",
    "get_registry",
    "create_error",
    "credentials_error",
    "signing_error",
]
