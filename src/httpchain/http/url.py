# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers used when finalizing requests."""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urlencode

import httpx

from ..errors import UrlParseError

ALLOWED_SCHEMES = frozenset({"http", "https"})


def parse_url(raw: str) -> httpx.URL:
    """
    Parse an absolute http(s) URL.

    Raises UrlParseError for malformed URLs as well as relative URLs, since the
    transport cannot send those anywhere.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise UrlParseError(str(raw), "empty URL")
    try:
        url = httpx.URL(raw.strip())
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise UrlParseError(raw, str(exc)) from exc
    if url.scheme not in ALLOWED_SCHEMES:
        raise UrlParseError(raw, f"unsupported scheme {url.scheme!r}" if url.scheme else "missing scheme")
    if not url.host:
        raise UrlParseError(raw, "missing host")
    return url


def encode_query(params: Sequence[tuple[str, str]]) -> str:
    """Encode query pairs in insertion order."""
    return urlencode(list(params))


def build_url(raw: str, params: Sequence[tuple[str, str]] = ()) -> str:
    """
    Return `raw` with `params` appended to its query string.

    Existing query parameters are kept; the fragment is dropped because it is
    never transmitted.
    """
    url = parse_url(raw)
    url = url.copy_with(fragment=None)
    if not params:
        return str(url)
    existing = url.query.decode("ascii")
    encoded = encode_query(params)
    query = f"{existing}&{encoded}" if existing else encoded
    return str(url.copy_with(query=query.encode("ascii")))


__all__ = ["ALLOWED_SCHEMES", "build_url", "encode_query", "parse_url"]
