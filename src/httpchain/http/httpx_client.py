# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import httpx

from ..config import HttpSettings, load_http_settings
from ..constants import HEADER_USER_AGENT
from ..errors import TransportError
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = httpx.Headers(request.headers)
        headers.setdefault(HEADER_USER_AGENT, self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        follow_redirects = request.allow_redirects
        if follow_redirects is None:
            follow_redirects = self.settings.allow_redirects

        try:
            outgoing = self._client.build_request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
            )
            resp = self._client.send(outgoing, stream=True, follow_redirects=follow_redirects)
        except httpx.HTTPError as exc:
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            raise TransportError.from_exception(exc) from exc

        logger.debug("%s %s -> %s", request.method, request.url, resp.status_code)
        return HttpResponse(
            status_code=resp.status_code,
            headers=httpx.Headers(resp.headers),
            url=str(resp.url),
            request=request,
            stream=_iter_body(resp),
            closer=resp.close,
            encoding=resp.charset_encoding,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _iter_body(resp: httpx.Response) -> Iterator[bytes]:
    try:
        yield from resp.iter_bytes()
    except httpx.HTTPError as exc:
        raise TransportError.from_exception(exc) from exc
