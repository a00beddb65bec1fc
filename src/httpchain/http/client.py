# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from __future__ import annotations

import threading
from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """Minimal protocol for issuing HTTP requests."""

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


_default_client: HttpClient | None = None
_default_client_lock = threading.Lock()


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())


def get_default_http_client() -> HttpClient:
    """Return the process-wide client used when neither the builder nor the context supplies one."""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = create_default_http_client()
        return _default_client


def reset_default_http_client() -> None:
    """Close and forget the process-wide client (used by tests and at shutdown)."""
    global _default_client
    with _default_client_lock:
        client, _default_client = _default_client, None
    if client is not None:
        client.close()
