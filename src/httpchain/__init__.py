# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httpchain package entrypoint.

Fluent, immutable HTTP request builders with status-gated response handlers.
The transport is abstracted behind an injectable HttpClient (httpx by default),
and request/response objects are modeled with typed dataclasses.

    users: list = []
    errors: dict = {}
    httpchain.get("https://api.example.com/users").add_param("page_size", "5").handle(
        json_handler(users).when(STATUS_2XX),
        json_handler(errors).when(STATUS_4XX),
    )
"""

from .config import HttpSettings, load_http_settings
from .constants import (
    HEADER_ACCEPT,
    HEADER_CONTENT_TYPE,
    MIME_TYPE_FORM_URLENCODED,
    MIME_TYPE_JSON,
    MIME_TYPE_XML,
    Method,
)
from .context import RequestContext, get_request_context, request_context
from .diagnostics import dump_request, dump_response
from .errors import (
    BodyTooLargeError,
    DecodeError,
    EncodeError,
    ErrorCategory,
    HandlerError,
    HttpChainError,
    RequestCancelled,
    RequestHookError,
    ResponseError,
    ResponseHookError,
    TransportError,
    UrlParseError,
)
from .form import Form
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .request import (
    DeleteBuilder,
    GetBuilder,
    PatchBuilder,
    PostBuilder,
    PutBuilder,
    RequestBuilder,
    builder,
    delete,
    get,
    patch,
    post,
    put,
    with_after,
    with_before,
    with_client,
    with_context,
)
from .response import (
    STATUS_1XX,
    STATUS_2XX,
    STATUS_3XX,
    STATUS_4XX,
    STATUS_5XX,
    STATUS_ACCEPTED,
    STATUS_BAD_GATEWAY,
    STATUS_BAD_REQUEST,
    STATUS_CREATED,
    STATUS_FORBIDDEN,
    STATUS_INTERNAL_SERVER_ERROR,
    STATUS_NOT_FOUND,
    STATUS_OK,
    STATUS_UNAUTHORIZED,
    STATUS_UNPROCESSABLE_ENTITY,
    ResponseHandler,
    json_handler,
    status,
    status_range,
    xml_handler,
)
from .version import __version__

__all__ = [
    "BodyTooLargeError",
    "DecodeError",
    "DeleteBuilder",
    "EncodeError",
    "ErrorCategory",
    "Form",
    "GetBuilder",
    "HEADER_ACCEPT",
    "HEADER_CONTENT_TYPE",
    "HandlerError",
    "HttpChainError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "MIME_TYPE_FORM_URLENCODED",
    "MIME_TYPE_JSON",
    "MIME_TYPE_XML",
    "Method",
    "PatchBuilder",
    "PostBuilder",
    "PutBuilder",
    "RequestBuilder",
    "RequestCancelled",
    "RequestContext",
    "RequestHookError",
    "ResponseError",
    "ResponseHandler",
    "ResponseHookError",
    "STATUS_1XX",
    "STATUS_2XX",
    "STATUS_3XX",
    "STATUS_4XX",
    "STATUS_5XX",
    "STATUS_ACCEPTED",
    "STATUS_BAD_GATEWAY",
    "STATUS_BAD_REQUEST",
    "STATUS_CREATED",
    "STATUS_FORBIDDEN",
    "STATUS_INTERNAL_SERVER_ERROR",
    "STATUS_NOT_FOUND",
    "STATUS_OK",
    "STATUS_UNAUTHORIZED",
    "STATUS_UNPROCESSABLE_ENTITY",
    "StubHttpClient",
    "TransportError",
    "UrlParseError",
    "builder",
    "create_default_http_client",
    "delete",
    "dump_request",
    "dump_response",
    "get",
    "get_request_context",
    "json_handler",
    "load_http_settings",
    "patch",
    "post",
    "put",
    "request_context",
    "setup_logging",
    "status",
    "status_range",
    "with_after",
    "with_before",
    "with_client",
    "with_context",
    "xml_handler",
    "__version__",
]
