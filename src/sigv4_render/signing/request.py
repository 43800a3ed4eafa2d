"""Build the rendered request handed to the signer."""

from collections.abc import Mapping
from typing import Any

from sigv4_render.template import TemplateContext, TemplateEngine, to_json, to_text

from .models import RequestParams
from .types import Credentials, SigningRequest


def _body_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode()
    return to_json(value)


def _header_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(to_text(item) for item in value)
    return to_text(value)


def render_body(
    params: RequestParams,
    context: TemplateContext,
    engine: TemplateEngine,
) -> str | None:
    """Render the request body.

    ``body`` is rendered as-is; otherwise the ``json`` payload is encoded to
    compact JSON text first and that text is rendered. Non-text results are
    JSON-encoded.

    Args:
        params: Request parameters
        context: Template context
        engine: Template engine

    Returns:
        Body text, or None when the request has no body
    """
    if params.body:
        return _body_text(engine.render(params.body, context))
    if params.json_payload is not None:
        return _body_text(engine.render(to_json(params.json_payload), context))
    return None


def build_signing_request(
    params: RequestParams,
    context: TemplateContext,
    engine: TemplateEngine,
    *,
    service_name: str,
    region: str,
    credentials: Credentials,
) -> SigningRequest:
    """Render request parameters into a SigningRequest.

    Args:
        params: Request parameters
        context: Template context for headers and body
        engine: Template engine
        service_name: AWS service code
        region: Signing region
        credentials: Validated credentials

    Returns:
        SigningRequest ready for the signer
    """
    headers: dict[str, str] = {"Host": params.host}
    rendered = engine.render(params.headers, context)
    if isinstance(rendered, Mapping):
        for name, value in rendered.items():
            headers[name] = _header_text(value)

    return SigningRequest(
        method=params.method.upper(),
        path=params.path,
        headers=headers,
        body=render_body(params, context, engine),
        region=region,
        service_name=service_name,
        credentials=credentials,
    )
