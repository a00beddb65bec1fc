# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Immutable request builders.

Every chain call returns a new builder; headers, parameters, hooks and handlers
are stored as tuples, so a derived builder never shares mutable state with the
builder it came from and chains can be branched and reused freely.

GET and DELETE builders expose only the common operations. POST, PUT and PATCH
builders add the body operations. Default Content-Type and Accept headers are
only applied when the caller has not already set them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, fields, replace
from typing import Any, BinaryIO, TypeVar

import httpx

from .codec import encode_json, encode_xml
from .constants import (
    HEADER_ACCEPT,
    HEADER_CONTENT_TYPE,
    MIME_TYPE_FORM_URLENCODED,
    MIME_TYPE_JSON,
    MIME_TYPE_XML,
    Method,
)
from .context import RequestContext, get_request_context
from .form import Form
from .http.client import HttpClient
from .http.models import HttpRequest, HttpResponse
from .http.url import build_url
from .response import ResponseHandler, json_handler, xml_handler

logger = logging.getLogger(__name__)

BeforeFn = Callable[[HttpRequest], Any]
AfterFn = Callable[[HttpResponse], Any]
Body = bytes | str | BinaryIO

_B = TypeVar("_B", bound="BaseBuilder")
_T = TypeVar("_T", bound="BaseBuilder")


@dataclass(frozen=True)
class BaseBuilder:
    client: HttpClient | None = None
    method: Method = Method.GET
    url: str = ""
    header_pairs: tuple[tuple[str, str], ...] = ()
    param_pairs: tuple[tuple[str, str], ...] = ()
    body_source: bytes | None = None
    request_context: RequestContext | None = None
    request_timeout: float | None = None
    before_hooks: tuple[BeforeFn, ...] = ()
    after_hooks: tuple[AfterFn, ...] = ()
    handlers: tuple[ResponseHandler, ...] = ()

    # -- derivation -------------------------------------------------------

    def _convert(self, cls: type[_T], **changes: Any) -> _T:
        state = {f.name: getattr(self, f.name) for f in fields(self)}
        state.update(changes)
        return cls(**state)

    def _has_header(self, key: str) -> bool:
        lower = key.lower()
        return any(name.lower() == lower for name, _ in self.header_pairs)

    def _with_default_header(self: _B, key: str, value: str) -> _B:
        if self._has_header(key):
            return self
        return self.set_header(key, value)

    # -- common operations ------------------------------------------------

    @property
    def headers(self) -> httpx.Headers:
        return httpx.Headers(list(self.header_pairs))

    @property
    def params(self) -> httpx.QueryParams:
        return httpx.QueryParams(list(self.param_pairs))

    def context(self: _B, ctx: RequestContext) -> _B:
        return replace(self, request_context=ctx)

    def timeout(self: _B, seconds: float) -> _B:
        """Set a per-request timeout layered onto whichever context is in effect at send time."""
        if seconds <= 0:
            raise ValueError("timeout must be positive")
        return replace(self, request_timeout=seconds)

    def resolved_context(self) -> RequestContext:
        """The builder context (or the ambient one) with the builder timeout applied."""
        context = self.request_context or get_request_context()
        if self.request_timeout is not None:
            context = context.with_timeout(self.request_timeout)
        return context

    def add_header(self: _B, key: str, value: Any) -> _B:
        return replace(self, header_pairs=self.header_pairs + ((key, str(value)),))

    def set_header(self: _B, key: str, value: Any) -> _B:
        lower = key.lower()
        kept = tuple(pair for pair in self.header_pairs if pair[0].lower() != lower)
        return replace(self, header_pairs=kept + ((key, str(value)),))

    def add_param(self: _B, key: str, value: Any) -> _B:
        return replace(self, param_pairs=self.param_pairs + ((key, str(value)),))

    def set_param(self: _B, key: str, value: Any) -> _B:
        kept = tuple(pair for pair in self.param_pairs if pair[0] != key)
        return replace(self, param_pairs=kept + ((key, str(value)),))

    def before(self: _B, fn: BeforeFn) -> _B:
        return replace(self, before_hooks=self.before_hooks + (fn,))

    def after(self: _B, fn: AfterFn) -> _B:
        return replace(self, after_hooks=self.after_hooks + (fn,))

    def add_handler(self: _B, *handlers: ResponseHandler) -> _B:
        return replace(self, handlers=self.handlers + handlers)

    # -- terminal operations ----------------------------------------------

    def build(self) -> HttpRequest:
        """Materialize the request; raises UrlParseError for an unusable URL."""
        url = build_url(self.url, self.param_pairs)
        context = self.resolved_context()
        request = HttpRequest(
            url=url,
            method=self.method.value,
            headers=self.headers,
            body=self.body_source,
            timeout=context.effective_timeout(),
        )
        logger.debug("built %s %s", request.method, request.url)
        return request

    def do(self) -> HttpResponse:
        from .executor import send

        return send(self)

    def handle(self, *handlers: ResponseHandler) -> HttpResponse:
        """Send with the registered handlers followed by `handlers`."""
        return self.add_handler(*handlers).do()

    def json_response(self, target: Any) -> HttpResponse:
        """Send and decode the body as JSON into `target`."""
        return self._with_default_header(HEADER_ACCEPT, MIME_TYPE_JSON).handle(json_handler(target))

    def xml_response(self, target: Any) -> HttpResponse:
        """Send and decode the body as XML into `target`."""
        return self._with_default_header(HEADER_ACCEPT, MIME_TYPE_XML).handle(xml_handler(target))


class NoPayloadBuilder(BaseBuilder):
    pass


class GetBuilder(NoPayloadBuilder):
    pass


class DeleteBuilder(NoPayloadBuilder):
    pass


class PayloadBuilder(BaseBuilder):
    def json_body(self: _B, value: Any) -> _B:
        encoded = encode_json(value)
        return replace(self, body_source=encoded)._with_default_header(HEADER_CONTENT_TYPE, MIME_TYPE_JSON)

    def xml_body(self: _B, value: Any) -> _B:
        encoded = encode_xml(value)
        return replace(self, body_source=encoded)._with_default_header(HEADER_CONTENT_TYPE, MIME_TYPE_XML)

    def body(self: _B, data: Body) -> _B:
        if not isinstance(data, (bytes, bytearray, memoryview, str)) and not callable(getattr(data, "read", None)):
            raise TypeError(f"unsupported body type {type(data).__name__}")
        return replace(self, body_source=_read_body(data))

    def form_body(self: _B, form: Form | dict[str, Any]) -> _B:
        if not isinstance(form, Form):
            form = Form.of(form)
        encoded = form.encode().encode("ascii")
        return replace(self, body_source=encoded)._with_default_header(
            HEADER_CONTENT_TYPE, MIME_TYPE_FORM_URLENCODED
        )


class PostBuilder(PayloadBuilder):
    pass


class PutBuilder(PayloadBuilder):
    pass


class PatchBuilder(PayloadBuilder):
    pass


class RequestBuilder(BaseBuilder):
    """Method-agnostic root builder; carries shared configuration into method builders."""

    def get(self, url: str) -> GetBuilder:
        return self._convert(GetBuilder, method=Method.GET, url=url)

    def post(self, url: str) -> PostBuilder:
        return self._convert(PostBuilder, method=Method.POST, url=url)

    def put(self, url: str) -> PutBuilder:
        return self._convert(PutBuilder, method=Method.PUT, url=url)

    def patch(self, url: str) -> PatchBuilder:
        return self._convert(PatchBuilder, method=Method.PATCH, url=url)

    def delete(self, url: str) -> DeleteBuilder:
        return self._convert(DeleteBuilder, method=Method.DELETE, url=url)


def _read_body(source: Body) -> bytes:
    """Materialize `source` once so the builder can be sent any number of times."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, str):
        return source.encode("utf-8")
    data = source.read()
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


# -- options --------------------------------------------------------------

Option = Callable[[RequestBuilder], RequestBuilder]


def with_client(http_client: HttpClient) -> Option:
    """Send through `http_client` instead of the ambient or default client."""
    if http_client is None:
        raise ValueError("http_client must not be None")

    def apply(b: RequestBuilder) -> RequestBuilder:
        return replace(b, client=http_client)

    return apply


def with_before(fn: BeforeFn) -> Option:
    return lambda b: b.before(fn)


def with_after(fn: AfterFn) -> Option:
    return lambda b: b.after(fn)


def with_context(ctx: RequestContext) -> Option:
    return lambda b: b.context(ctx)


def builder(*options: Option) -> RequestBuilder:
    b = RequestBuilder()
    for option in options:
        b = option(b)
    return b


def get(url: str, *options: Option) -> GetBuilder:
    return builder(*options).get(url)


def post(url: str, *options: Option) -> PostBuilder:
    return builder(*options).post(url)


def put(url: str, *options: Option) -> PutBuilder:
    return builder(*options).put(url)


def patch(url: str, *options: Option) -> PatchBuilder:
    return builder(*options).patch(url)


def delete(url: str, *options: Option) -> DeleteBuilder:
    return builder(*options).delete(url)


__all__ = [
    "AfterFn",
    "BaseBuilder",
    "BeforeFn",
    "DeleteBuilder",
    "GetBuilder",
    "NoPayloadBuilder",
    "Option",
    "PatchBuilder",
    "PayloadBuilder",
    "PostBuilder",
    "PutBuilder",
    "RequestBuilder",
    "builder",
    "delete",
    "get",
    "patch",
    "post",
    "put",
    "with_after",
    "with_before",
    "with_client",
    "with_context",
]
