# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models exchanged with HttpClient implementations."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

import httpx


@dataclass
class HttpRequest:
    """Finalized request produced by a builder and consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: bytes | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None


@dataclass
class HttpResponse:
    """
    Response returned by an HttpClient.

    The body is not read until `read()` is called; `content` stays None until then.
    Responses that arrive already buffered (stubs, adapters) pass `content` directly.
    """

    status_code: int
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    url: str | None = None
    request: HttpRequest | None = None
    content: bytes | None = None
    stream: Iterable[bytes] | None = field(default=None, repr=False)
    closer: Callable[[], None] | None = field(default=None, repr=False)
    encoding: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_read(self) -> bool:
        return self.content is not None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def read(self, max_bytes: int | None = None) -> bytes:
        """
        Buffer the full body (up to `max_bytes`) and release the underlying stream.

        Without an explicit `max_bytes` the limit recorded in `meta["max_body_bytes"]`
        applies, so hooks that read the body early honour the same cap as dispatch.
        """
        if self.content is not None:
            return self.content
        if max_bytes is None:
            max_bytes = self.meta.get("max_body_bytes")

        content = bytearray()
        truncated = False
        try:
            for chunk in self._iter_stream():
                if not chunk:
                    continue
                if max_bytes is not None and max_bytes > 0:
                    remaining = max_bytes - len(content)
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                content.extend(chunk)
        finally:
            self.close()

        self.content = bytes(content)
        self.meta["body_truncated"] = truncated
        self.meta["body_bytes_read"] = len(content)
        return self.content

    def close(self) -> None:
        closer, self.closer = self.closer, None
        self.stream = None
        if closer is not None:
            closer()

    @property
    def text(self) -> str:
        content = self.read()
        encoding = self.encoding or "utf-8"
        try:
            return content.decode(encoding, errors="replace")
        except LookupError:
            return content.decode("utf-8", errors="replace")

    def body_stream(self) -> io.BytesIO:
        """Return an independent readable view over the buffered body."""
        return io.BytesIO(self.read())

    def _iter_stream(self) -> Iterator[bytes]:
        if self.stream is None:
            return iter(())
        return iter(self.stream)

    def __enter__(self) -> HttpResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["HttpRequest", "HttpResponse"]
