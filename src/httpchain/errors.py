# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .http.models import HttpResponse


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        cause = exc.__cause__ or exc.__context__
        if isinstance(cause, ssl.SSLError):
            return ErrorCategory.SSL_ERROR
        if isinstance(cause, socket.gaierror):
            return ErrorCategory.DNS_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class HttpChainError(Exception):
    """Base class for every error raised by httpchain."""


class UrlParseError(HttpChainError, ValueError):
    """Raised by build() when the request URL cannot be parsed."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class EncodeError(HttpChainError, ValueError):
    """Raised when a request body cannot be serialized."""


class DecodeError(HttpChainError, ValueError):
    """Raised when a response body cannot be decoded into its target."""


class RequestCancelled(HttpChainError):
    """Raised when the request context was cancelled or its deadline passed before sending."""


class RequestHookError(HttpChainError):
    """A pre-send hook failed; the request was never transmitted."""


class TransportError(HttpChainError):
    """The transport could not complete the exchange."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category

    @classmethod
    def from_exception(cls, exc: BaseException) -> TransportError:
        return cls(str(exc) or type(exc).__name__, categorize_exception(exc))


class ResponseError(HttpChainError):
    """An error raised after a response was received; the response stays available."""

    def __init__(self, message: str, response: HttpResponse):
        super().__init__(message)
        self.response = response


class ResponseHookError(ResponseError):
    """A post-receive hook failed before any handler ran."""


class BodyTooLargeError(ResponseError):
    """The response body exceeded the configured size limit; no handler ran."""

    def __init__(self, message: str, response: HttpResponse, limit: int):
        super().__init__(message, response)
        self.limit = limit


class HandlerError(ResponseError):
    """A response handler failed to decode the body; later handlers were skipped."""

    def __init__(self, message: str, response: HttpResponse, index: int):
        super().__init__(message, response)
        self.index = index


__all__ = [
    "BodyTooLargeError",
    "DecodeError",
    "EncodeError",
    "ErrorCategory",
    "HandlerError",
    "HttpChainError",
    "RequestCancelled",
    "RequestHookError",
    "ResponseError",
    "ResponseHookError",
    "TransportError",
    "UrlParseError",
    "categorize_exception",
]
