"""aws-sigv4 plugin: render request templates, then sign.

The plugin owns credential state and a FIFO of requests that arrived
before credentials finished loading. Every request's callback is invoked
exactly once: with None once the request is signed (or deliberately left
unsigned), or with a SigV4Error.
"""

from collections import deque
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from sigv4_render.config import PLUGIN_NAME, ConfigLoader, PluginConfig
from sigv4_render.errors import SigV4Error, create_error, credentials_error, signing_error
from sigv4_render.logging import LogConfig, PluginLogger
from sigv4_render.template import TemplateContext, TemplateEngine

from .models import RequestParams
from .request import build_signing_request
from .types import Credentials, CredentialsProvider, RequestCallback, RequestSigner
from .validation import check_signing_inputs

PROCESSOR_NAME = "addAmazonSignatureV4"


@dataclass
class _PendingRequest:
    request_params: MutableMapping[str, Any]
    context: Any
    callback: RequestCallback


class SigV4Plugin:
    """Signs outgoing requests after rendering their templates.

    Lifecycle:
    1. ``start()`` asks the credentials provider for credentials.
    2. ``add_signature()`` signs immediately once credentials are loaded,
       otherwise queues the request.
    3. When credentials arrive, queued requests are signed in arrival
       order; when the fetch fails they are released unsigned.
    """

    name = PLUGIN_NAME

    def __init__(
        self,
        config: PluginConfig,
        signer: RequestSigner,
        credentials_provider: CredentialsProvider,
        logger: PluginLogger | None = None,
    ):
        """Initialize the plugin.

        Args:
            config: Resolved plugin configuration (service name, region, limits)
            signer: Signing collaborator
            credentials_provider: Credentials collaborator
            logger: Optional logger (defaults to one built from config.logging)
        """
        self.config = config
        self._signer = signer
        self._credentials_provider = credentials_provider
        self._logger = logger or PluginLogger(
            LogConfig(level=config.logging.level, format=config.logging.format)
        )
        self._log = self._logger.signing(config.service_name)
        self._engine = TemplateEngine(
            max_depth=config.template.max_depth,
            logger=self._logger.render(),
        )

        self._credentials: Credentials | None = None
        self._ready = False
        self._fetch_error: SigV4Error | None = None
        self._started = False
        self._pending: deque[_PendingRequest] = deque()

    @classmethod
    def from_script_config(
        cls,
        script_config: Any,
        signer: RequestSigner,
        credentials_provider: CredentialsProvider,
        environ: Mapping[str, str] | None = None,
    ) -> "SigV4Plugin":
        """Validate a script's ``config`` block and build a started plugin.

        Raises:
            SigV4Error: If the plugin section is missing or invalid
        """
        config = ConfigLoader(environ=environ).load_from_script_config(script_config)
        plugin = cls(config, signer, credentials_provider)
        plugin.start()
        return plugin

    @property
    def engine(self) -> TemplateEngine:
        """Template engine used for headers and bodies."""
        return self._engine

    @property
    def ready(self) -> bool:
        """Whether credentials have loaded."""
        return self._ready

    @property
    def pending_count(self) -> int:
        """Number of requests waiting for credentials."""
        return len(self._pending)

    def start(self) -> None:
        """Request credentials from the provider (once)."""
        if self._started:
            return
        self._started = True
        self._credentials_provider.get_credentials(self._on_credentials)

    def processor(self) -> dict[str, Callable[..., None]]:
        """Processor hooks to register on the script.

        The hook takes the runner's ``(request_params, context, events, callback)``
        argument order; ``events`` is unused.
        """

        def hook(
            request_params: MutableMapping[str, Any],
            context: Any,
            events: Any,
            callback: RequestCallback,
        ) -> None:
            self.add_signature(request_params, context, callback)

        return {PROCESSOR_NAME: hook}

    def add_signature(
        self,
        request_params: MutableMapping[str, Any],
        context: Any,
        callback: RequestCallback,
    ) -> None:
        """Render and sign a request, merging signed headers into it.

        Args:
            request_params: Mutable request parameters (``headers`` is updated in place)
            context: TemplateContext or ``{"vars": ..., "funcs": ...}`` mapping
            callback: Called once with None or a SigV4Error
        """
        if self._ready:
            self._sign(request_params, context, callback)
            return

        if self._fetch_error is not None:
            self._log.credentials_failed(self._fetch_error)
            callback(None)
            return

        max_pending = self.config.signing.max_pending
        if max_pending is not None and len(self._pending) >= max_pending:
            self._log.queue_full(max_pending)
            callback(
                create_error(
                    "SIGNING_QUEUE_FULL",
                    max_pending=max_pending,
                    service_name=self.config.service_name,
                )
            )
            return

        self._pending.append(_PendingRequest(request_params, context, callback))
        self._log.queued(len(self._pending))

    def _on_credentials(self, error: Exception | None, credentials: Credentials | None) -> None:
        if error is not None:
            self._fetch_error = credentials_error(error, self.config.service_name)
            self._log.credentials_failed(self._fetch_error)
            self._drain(lambda pending: pending.callback(None))
            return

        self._credentials = credentials
        self._ready = True
        self._log.credentials_ready(len(self._pending))
        self._drain(self._sign_pending)

    def _drain(self, release: Callable[[_PendingRequest], None]) -> None:
        while self._pending:
            pending = self._pending.popleft()
            try:
                release(pending)
            except Exception as e:  # noqa: BLE001
                # Keep draining when a callback raises
                self._log.callback_failed(e)

    def _sign_pending(self, pending: _PendingRequest) -> None:
        self._sign(pending.request_params, pending.context, pending.callback)

    def _sign(
        self,
        request_params: MutableMapping[str, Any],
        context: Any,
        callback: RequestCallback,
    ) -> None:
        region = self.config.region
        problem = check_signing_inputs(self._credentials, region)
        if problem is not None:
            self._log.invalid(problem)
            callback(None)
            return

        try:
            params = RequestParams.model_validate(dict(request_params))
            request = build_signing_request(
                params,
                TemplateContext.from_mapping(context),
                self._engine,
                service_name=self.config.service_name,
                region=region,  # type: ignore[arg-type]
                credentials=self._credentials,  # type: ignore[arg-type]
            )
            signed_headers = self._signer.sign(request)
        except Exception as e:  # noqa: BLE001
            error = signing_error(e, self.config.service_name)
            self._log.failed(error)
            callback(error)
            return

        headers = request_params.get("headers")
        if not isinstance(headers, MutableMapping):
            headers = {}
            request_params["headers"] = headers
        headers.update(signed_headers)

        self._log.signed(request.method, request.path)
        callback(None)
