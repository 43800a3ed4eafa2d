"""Request signing preparation for the aws-sigv4 plugin."""

from .models import RequestParams
from .plugin import PROCESSOR_NAME, SigV4Plugin
from .request import build_signing_request, render_body
from .types import (
    Credentials,
    CredentialsCallback,
    CredentialsProvider,
    RequestCallback,
    RequestSigner,
    SigningRequest,
)
from .validation import check_signing_inputs, validate_credentials

__all__ = [
    "SigV4Plugin",
    "PROCESSOR_NAME",
    "RequestParams",
    "SigningRequest",
    "Credentials",
    "CredentialsCallback",
    "CredentialsProvider",
    "RequestCallback",
    "RequestSigner",
    "build_signing_request",
    "render_body",
    "check_signing_inputs",
    "validate_credentials",
]
