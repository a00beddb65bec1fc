# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Trace dumps of requests and responses.

Both helpers have hook signatures, so they can be attached directly:
``get(url).before(dump_request).after(dump_response)``.
"""

from __future__ import annotations

import sys
from typing import TextIO

import httpx

from .http.models import HttpRequest, HttpResponse


def _format_headers(headers: httpx.Headers) -> str:
    encoding = headers.encoding
    return "".join(f"{name.decode(encoding)}: {value.decode(encoding)}\r\n" for name, value in headers.raw)


def _format_body(body: bytes | None) -> str:
    if not body:
        return ""
    return body.decode("utf-8", errors="replace")


def format_request(request: HttpRequest) -> str:
    url = httpx.URL(request.url)
    target = url.raw_path.decode("ascii") or "/"
    headers = httpx.Headers(request.headers)
    headers.setdefault("Host", url.netloc.decode("ascii"))
    if request.body:
        headers.setdefault("Content-Length", str(len(request.body)))
    return f"{request.method} {target} HTTP/1.1\r\n{_format_headers(headers)}\r\n{_format_body(request.body)}"


def format_response(response: HttpResponse) -> str:
    """
    Format the response; reads (and buffers) the body if it has not been read yet.

    The read honours `meta["max_body_bytes"]`, which send() records before any
    post-receive hook runs.
    """
    reason = httpx.codes.get_reason_phrase(response.status_code)
    status_line = f"HTTP/1.1 {response.status_code} {reason}".rstrip()
    return f"{status_line}\r\n{_format_headers(response.headers)}\r\n{_format_body(response.read())}"


def dump_request(request: HttpRequest, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    out.write(f"request dump:\n{format_request(request)}\n")


def dump_response(response: HttpResponse, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    out.write(f"response dump:\n{format_response(response)}\n")


__all__ = ["dump_request", "dump_response", "format_request", "format_response"]
