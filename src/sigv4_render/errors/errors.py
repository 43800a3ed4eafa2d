"""Plugin error type."""

from dataclasses import dataclass, replace
from enum import Enum


class ErrorCategory(str, Enum):
    """Where an error comes from."""

    TEMPLATE = "TEMPLATE"  # rendering request templates
    SIGNING = "SIGNING"  # credentials, region, signer
    VALIDATION = "VALIDATION"  # script config checks
    SYSTEM = "SYSTEM"  # config files, environment


@dataclass
class SigV4Error(Exception):
    """Error raised by the plugin or passed to a request callback.

    ``str(error)`` is the message; ``detail`` and ``suggestion`` extend it
    in log lines.
    """

    code: str  # e.g. "TEMPLATE_RECURSION"
    category: ErrorCategory
    message: str
    detail: str | None = None
    suggestion: str | None = None
    retryable: bool = False
    service_name: str | None = None
    expression: str | None = None  # template call that triggered the error

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def for_service(self, service_name: str) -> "SigV4Error":
        """Copy of this error attributed to ``service_name``.

        An error that already names a service is returned unchanged.
        """
        if self.service_name:
            return self
        copy = replace(self, service_name=service_name)
        copy.__cause__ = self.__cause__
        return copy
