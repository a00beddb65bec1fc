# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations."""

from __future__ import annotations

import httpx

from ..errors import TransportError
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests."""

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(
        self,
        url: str,
        status_code: int = 200,
        *,
        body: bytes | str = b"",
        headers: dict[str, str] | None = None,
    ) -> None:
        content = body.encode("utf-8") if isinstance(body, str) else bytes(body)
        self._responses[url] = HttpResponse(
            status_code=status_code,
            headers=httpx.Headers(headers or {}),
            url=url,
            content=content,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if request.url not in self._responses:
            raise TransportError(f"No stubbed response configured for {request.url}")
        stored = self._responses[request.url]
        # Hand out a fresh, unread response per call so stored entries are never
        # consumed and reads go through the same size limit as a real transport.
        return HttpResponse(
            status_code=stored.status_code,
            headers=httpx.Headers(stored.headers),
            url=stored.url or request.url,
            request=request,
            stream=[stored.content or b""],
            encoding=stored.encoding,
        )

    def close(self) -> None:
        self.closed = True
