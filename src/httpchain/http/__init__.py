# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubHttpClient
from .client import (
    HttpClient,
    create_default_http_client,
    get_default_http_client,
    reset_default_http_client,
)
from .httpx_client import HttpxClient
from .models import HttpRequest, HttpResponse
from .url import build_url, encode_query, parse_url

__all__ = [
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "StubHttpClient",
    "build_url",
    "create_default_http_client",
    "encode_query",
    "get_default_http_client",
    "parse_url",
    "reset_default_http_client",
]
