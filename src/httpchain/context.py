# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Cancellation and ambient request context.

A RequestContext carries the timeout, deadline and cancellation event that are
threaded through to the transport. Builders that do not set a context fall back
to the ambient one installed with `request_context(...)`, which can also supply
a shared HttpClient and HttpSettings.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any

from .config import HttpSettings
from .errors import RequestCancelled
from .http.client import HttpClient


@dataclass(frozen=True)
class RequestContext:
    timeout: float | None = None
    deadline: float | None = None
    cancel_event: threading.Event | None = None
    http_client: HttpClient | None = None
    http_settings: HttpSettings | None = None

    def with_timeout(self, seconds: float) -> RequestContext:
        """Return a copy whose per-request timeout is `seconds`."""
        if seconds <= 0:
            raise ValueError("timeout must be positive")
        return replace(self, timeout=seconds)

    def with_deadline(self, seconds_from_now: float) -> RequestContext:
        """Return a copy that expires `seconds_from_now` seconds in the future (monotonic clock)."""
        deadline = time.monotonic() + seconds_from_now
        if self.deadline is not None:
            deadline = min(deadline, self.deadline)
        return replace(self, deadline=deadline)

    def with_cancel_event(self, event: threading.Event) -> RequestContext:
        return replace(self, cancel_event=event)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None when no deadline is set."""
        if self.deadline is None:
            return None
        return self.deadline - time.monotonic()

    def check(self) -> None:
        """Raise RequestCancelled when the context is cancelled or expired."""
        if self.cancelled:
            raise RequestCancelled("request context was cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise RequestCancelled("request context deadline exceeded")

    def effective_timeout(self) -> float | None:
        """The tighter of the configured timeout and the time left before the deadline."""
        remaining = self.remaining()
        if remaining is None:
            return self.timeout
        if self.timeout is None:
            return remaining
        return min(self.timeout, remaining)


_current_request_context: ContextVar[RequestContext | None] = ContextVar("httpchain_request_context", default=None)


def get_request_context() -> RequestContext:
    """Return the current ambient request context."""
    return _current_request_context.get() or RequestContext()


@contextmanager
def request_context(**overrides: Any) -> Iterator[RequestContext]:
    """
    Context manager that layers overrides onto the ambient RequestContext.

    None-valued overrides are ignored to preserve outer context values.
    """
    current = get_request_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_request_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_request_context.reset(token)


__all__ = [
    "RequestContext",
    "get_request_context",
    "request_context",
]
