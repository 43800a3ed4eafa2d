"""Error templates keyed by code."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .errors import ErrorCategory, SigV4Error

PLUGIN_NAME = "aws-sigv4"


@dataclass(frozen=True)
class ErrorTemplate:
    """Message pattern for one error code.

    ``message``, ``detail`` and ``suggestion`` may contain ``{name}``
    placeholders filled from the creation context.
    """

    code: str
    category: ErrorCategory
    message: str
    detail: str | None = None
    suggestion: str | None = None
    retryable: bool = False


def _format(text: str | None, context: dict[str, Any]) -> str | None:
    if text is None:
        return None
    try:
        return text.format(**context)
    except (KeyError, IndexError, ValueError):
        # Missing context value: keep the pattern as written
        return text


class ErrorRegistry:
    """Built-in error templates plus any registered later."""

    def __init__(self) -> None:
        self._templates = {template.code: template for template in BUILTIN_TEMPLATES}

    def __contains__(self, code: object) -> bool:
        return code in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def register(self, template: ErrorTemplate) -> None:
        """Add a template, replacing any with the same code."""
        self._templates[template.code] = template

    def create(self, code: str, context: dict[str, Any] | None = None) -> SigV4Error:
        """Create an error from the template registered for ``code``.

        A ``detail`` entry in the context overrides the template's detail.
        ``service_name`` and ``expression`` entries are copied onto the error.

        Raises:
            ValueError: If no template is registered for ``code``
        """
        template = self._templates.get(code)
        if template is None:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}
        return SigV4Error(
            code=template.code,
            category=template.category,
            message=_format(template.message, context) or code,
            detail=_format(context.get("detail") or template.detail, context),
            suggestion=_format(template.suggestion, context),
            retryable=template.retryable,
            service_name=context.get("service_name"),
            expression=context.get("expression"),
        )


BUILTIN_TEMPLATES = (
    # Rendering
    ErrorTemplate(
        code="TEMPLATE_RECURSION",
        category=ErrorCategory.TEMPLATE,
        message="Template expansion exceeded {max_depth} passes",
        detail="Expression '{expression}' keeps re-triggering expansion",
        suggestion="Make sure template functions do not return the call that produced them",
    ),
    # Script config (wording matches the plugin's documented messages)
    ErrorTemplate(
        code="PLUGIN_CONFIG_REQUIRED",
        category=ErrorCategory.VALIDATION,
        message=(
            f'The "{PLUGIN_NAME}" plugin requires configuration under '
            f"[script].config.plugins.{PLUGIN_NAME}"
        ),
        suggestion=f"Add a '{PLUGIN_NAME}' entry under config.plugins",
    ),
    ErrorTemplate(
        code="SERVICE_NAME_REQUIRED",
        category=ErrorCategory.VALIDATION,
        message='The "serviceName" parameter is required',
        suggestion="Set serviceName to the AWS service code, e.g. 'execute-api'",
    ),
    ErrorTemplate(
        code="SERVICE_NAME_INVALID",
        category=ErrorCategory.VALIDATION,
        message='The "serviceName" param must have a string value',
        suggestion="Quote the serviceName value in the script config",
    ),
    # Signing inputs
    ErrorTemplate(
        code="CREDENTIALS_MISSING",
        category=ErrorCategory.SIGNING,
        message="credentials not obtained.",
        suggestion="Ensure the credentials provider can obtain valid credentials.",
    ),
    ErrorTemplate(
        code="CREDENTIALS_INVALID",
        category=ErrorCategory.SIGNING,
        message="valid credentials not loaded.",
        suggestion=(
            "Ensure the credentials provider can obtain credentials with either both "
            "access_key_id and secret_access_key attributes (optionally session_token) "
            "or a role_arn attribute."
        ),
    ),
    ErrorTemplate(
        code="REGION_MISSING",
        category=ErrorCategory.SIGNING,
        message="valid region not configured.",
        suggestion=(
            "Ensure a valid region is available for signing your requests. "
            "Consider exporting or setting AWS_REGION, or set 'region' in the "
            "plugin configuration."
        ),
    ),
    ErrorTemplate(
        code="CREDENTIALS_FETCH_FAILED",
        category=ErrorCategory.SIGNING,
        message="credentials fetch error.",
        detail="Error: {reason}",
        suggestion="Ensure the credentials provider can obtain valid credentials.",
        retryable=True,
    ),
    ErrorTemplate(
        code="SIGNING_QUEUE_FULL",
        category=ErrorCategory.SIGNING,
        message="Pending signing queue is full ({max_pending} requests)",
        detail="Credentials are still loading and no more requests can be held",
        suggestion="Raise maxPending or delay the first requests",
        retryable=True,
    ),
    ErrorTemplate(
        code="SIGNING_FAILED",
        category=ErrorCategory.SIGNING,
        message="Request signing failed for service '{service_name}'",
        detail="{reason}",
        suggestion="Check the signer configuration and request parameters",
    ),
    # Config files and environment
    ErrorTemplate(
        code="CONFIG_INVALID",
        category=ErrorCategory.SYSTEM,
        message="Invalid configuration",
        detail="The plugin configuration is invalid",
        suggestion="Check the configuration file and fix errors",
    ),
)
