"""Test doubles for the signing collaborators."""

from collections.abc import Callable

from sigv4_render.signing import Credentials, SigningRequest


class FakeSigner:
    """Records requests and returns the request headers plus an Authorization header."""

    def __init__(self, fail: Exception | None = None):
        self.requests: list[SigningRequest] = []
        self.fail = fail

    def sign(self, request: SigningRequest) -> dict[str, str]:
        if self.fail is not None:
            raise self.fail
        self.requests.append(request)
        headers = dict(request.headers)
        headers["Authorization"] = (
            f"AWS4-HMAC-SHA256 Credential={request.credentials.access_key_id}"
        )
        headers["X-Amz-Date"] = "20240101T000000Z"
        return headers


class DeferredCredentials:
    """Credentials provider that resolves only when told to."""

    def __init__(self) -> None:
        self.callbacks: list[Callable[..., None]] = []

    def get_credentials(self, callback: Callable[..., None]) -> None:
        self.callbacks.append(callback)

    def resolve(self, credentials: Credentials) -> None:
        for callback in self.callbacks:
            callback(None, credentials)

    def fail(self, error: Exception) -> None:
        for callback in self.callbacks:
            callback(error, None)


class ImmediateCredentials:
    """Credentials provider that resolves synchronously."""

    def __init__(self, credentials: Credentials | None):
        self.credentials = credentials

    def get_credentials(self, callback: Callable[..., None]) -> None:
        callback(None, self.credentials)


class CallbackRecorder:
    """Collects the errors passed to request callbacks."""

    def __init__(self) -> None:
        self.calls: list[Exception | None] = []

    def __call__(self, error: Exception | None) -> None:
        self.calls.append(error)
