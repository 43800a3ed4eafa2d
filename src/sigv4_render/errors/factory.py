"""Build SigV4Errors for the plugin's failure paths."""

from typing import Any

from .errors import SigV4Error
from .registry import ErrorRegistry

_registry: ErrorRegistry | None = None


def get_registry() -> ErrorRegistry:
    """Shared registry of built-in error templates."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = ErrorRegistry()
    return _registry


def create_error(code: str, **context: Any) -> SigV4Error:
    """Create an error from its registered template.

    Args:
        code: Error code, e.g. ``"REGION_MISSING"``
        **context: Values for the template's ``{placeholders}``

    Returns:
        SigV4Error instance
    """
    return get_registry().create(code, context)


def credentials_error(error: BaseException, service_name: str) -> SigV4Error:
    """Wrap an error reported by the credentials provider.

    Args:
        error: Error passed to the credentials callback
        service_name: Service the plugin signs for

    Returns:
        CREDENTIALS_FETCH_FAILED error chained to ``error``
    """
    if isinstance(error, SigV4Error):
        return error.for_service(service_name)
    wrapped = create_error(
        "CREDENTIALS_FETCH_FAILED",
        reason=str(error) or type(error).__name__,
        service_name=service_name,
    )
    wrapped.__cause__ = error
    return wrapped


def signing_error(error: BaseException, service_name: str) -> SigV4Error:
    """Wrap an error raised while rendering or signing one request.

    Template errors keep their code; anything else (invalid request
    parameters, signer exceptions, runaway template functions) becomes
    SIGNING_FAILED.

    Args:
        error: Exception caught around render + sign
        service_name: Service the plugin signs for

    Returns:
        SigV4Error chained to ``error``
    """
    if isinstance(error, SigV4Error):
        return error.for_service(service_name)
    wrapped = create_error(
        "SIGNING_FAILED",
        reason=f"{type(error).__name__}: {error}",
        service_name=service_name,
    )
    wrapped.__cause__ = error
    return wrapped
