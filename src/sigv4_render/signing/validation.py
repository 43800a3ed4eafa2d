"""Credential and region checks run before each signature."""

from sigv4_render.errors import SigV4Error, create_error
from sigv4_render.types import ValidationIssue, ValidationResult

from .types import Credentials


def check_signing_inputs(credentials: Credentials | None, region: str | None) -> SigV4Error | None:
    """Return the first problem that prevents signing, or None.

    Credentials need either an access key pair or a role ARN.

    Args:
        credentials: Loaded credentials (None if not obtained)
        region: Signing region

    Returns:
        CREDENTIALS_MISSING, CREDENTIALS_INVALID or REGION_MISSING error, or None
    """
    if credentials is None:
        return create_error("CREDENTIALS_MISSING")
    if not (
        (credentials.access_key_id and credentials.secret_access_key) or credentials.role_arn
    ):
        return create_error("CREDENTIALS_INVALID")
    if not region:
        return create_error("REGION_MISSING")
    return None


def validate_credentials(credentials: Credentials | None, region: str | None) -> ValidationResult:
    """Validate credentials and region.

    Args:
        credentials: Loaded credentials (None if not obtained)
        region: Signing region

    Returns:
        ValidationResult with at most one error
    """
    error = check_signing_inputs(credentials, region)
    if error is None:
        return ValidationResult(valid=True)

    path = "region" if error.code == "REGION_MISSING" else "credentials"
    message = error.message if not error.suggestion else f"{error.message}  {error.suggestion}"
    return ValidationResult(valid=False, errors=[ValidationIssue(path=path, message=message)])
