"""Signing collaborator types."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class Credentials:
    """AWS credentials handed to the signer."""

    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None
    role_arn: str | None = None

    def __repr__(self) -> str:
        # Never print the secret
        return (
            f"Credentials(access_key_id={self.access_key_id!r}, "
            f"secret_access_key={'***' if self.secret_access_key else None}, "
            f"session_token={'***' if self.session_token else None}, "
            f"role_arn={self.role_arn!r})"
        )


@dataclass
class SigningRequest:
    """Rendered request handed to the signing collaborator."""

    method: str
    path: str
    headers: dict[str, str]
    body: str | None
    region: str
    service_name: str
    credentials: Credentials
    metadata: dict[str, Any] = field(default_factory=dict)


CredentialsCallback = Callable[[Exception | None, Credentials | None], None]
RequestCallback = Callable[[Exception | None], None]


class RequestSigner(Protocol):
    """Computes the signature for a rendered request."""

    def sign(self, request: SigningRequest) -> Mapping[str, str]:
        """Return the full signed header set for a request."""
        ...


class CredentialsProvider(Protocol):
    """Fetches credentials, possibly asynchronously."""

    def get_credentials(self, callback: CredentialsCallback) -> None:
        """Call ``callback(error, credentials)`` once credentials resolve."""
        ...
