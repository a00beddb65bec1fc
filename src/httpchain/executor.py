# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Send a finalized builder and dispatch the response to its handlers."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import httpx

from .config import load_http_settings
from .context import RequestContext, get_request_context
from .errors import BodyTooLargeError, HandlerError, RequestHookError, ResponseHookError, TransportError
from .http.client import HttpClient, get_default_http_client
from .http.models import HttpResponse

if TYPE_CHECKING:
    from .request import BaseBuilder

logger = logging.getLogger(__name__)


def resolve_context(builder: BaseBuilder) -> RequestContext:
    return builder.resolved_context()


def resolve_client(builder: BaseBuilder) -> HttpClient:
    """Builder client, then the request context's, then the ambient one, then the process default."""
    if builder.client is not None:
        return builder.client
    context = resolve_context(builder)
    if context.http_client is not None:
        return context.http_client
    ambient = get_request_context()
    if ambient.http_client is not None:
        return ambient.http_client
    return get_default_http_client()


def send(builder: BaseBuilder) -> HttpResponse:
    """
    Execute `builder` and return the response.

    Without registered handlers the response is returned unread and post-receive
    hooks are skipped. Otherwise the body is buffered once and each handler gets
    its own copy of the response, in registration order.
    """
    request = builder.build()
    context = resolve_context(builder)

    for hook in builder.before_hooks:
        try:
            hook(request)
        except Exception as exc:
            raise RequestHookError(f"pre-send hook {_describe(hook)} failed: {exc}") from exc

    context.check()
    client = resolve_client(builder)
    logger.debug("sending %s %s", request.method, request.url)
    try:
        response = client.request(request)
    except httpx.HTTPError as exc:
        raise TransportError.from_exception(exc) from exc
    if response.request is None:
        response.request = request
    settings = context.http_settings or load_http_settings()
    response.meta.setdefault("max_body_bytes", settings.max_body_bytes)

    if not builder.handlers:
        return response

    for hook in builder.after_hooks:
        try:
            hook(response)
        except Exception as exc:
            response.close()
            raise ResponseHookError(f"post-receive hook {_describe(hook)} failed: {exc}", response) from exc

    response.read()
    if response.meta.get("body_truncated"):
        limit = response.meta["max_body_bytes"]
        raise BodyTooLargeError(f"response body from {request.url} exceeds {limit} bytes", response, limit)

    for index, handler in enumerate(builder.handlers):
        view = replace(response, headers=httpx.Headers(response.headers), meta=dict(response.meta))
        try:
            fired = handler.handle(view)
        except Exception as exc:
            raise HandlerError(f"response handler {index} failed: {exc}", response, index) from exc
        logger.debug("handler %d fired %d time(s) for status %d", index, fired, response.status_code)

    return response


def _describe(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


__all__ = ["resolve_client", "resolve_context", "send"]
