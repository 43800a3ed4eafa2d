"""Request parameter models."""

from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, model_validator

_DEFAULT_PORTS = {"http": 80, "https": 443}


class RequestParams(BaseModel):
    """Outgoing request parameters as supplied by the load-test runner.

    Either ``uri`` or ``url`` must be set; ``uri`` wins when both are.
    Unknown keys are kept so the caller's request is not reshaped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    method: str = "GET"
    uri: str | None = None
    url: str | None = None
    headers: dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    json_payload: Any = Field(default=None, alias="json")

    @model_validator(mode="after")
    def _require_target(self) -> "RequestParams":
        if not (self.uri or self.url):
            msg = "request parameters need a 'uri' or 'url'"
            raise ValueError(msg)
        return self

    @property
    def target(self) -> str:
        """The request URL."""
        return self.uri or self.url or ""

    @property
    def path(self) -> str:
        """Path plus query string, ``/`` when the URL has no path."""
        parts = urlsplit(self.target)
        path = parts.path or "/"
        if parts.query:
            path += f"?{parts.query}"
        return path

    @property
    def host(self) -> str:
        """Host header value, with the port only when it is not the scheme default."""
        parts = urlsplit(self.target)
        host = parts.hostname or ""
        port = parts.port
        if port and port != _DEFAULT_PORTS.get(parts.scheme):
            host = f"{host}:{port}"
        return host
