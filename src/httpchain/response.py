# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Response handlers and status-code conditions.

A ResponseHandler pairs a decode function with zero or more conditions. With no
conditions the decode always runs. Otherwise every condition is evaluated
independently and the decode runs once for each one that holds, so a handler
gated on `[status(200), status(200)]` decodes a 200 response twice.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

import httpx

from .codec import assign, decode_json, decode_xml, validate_target
from .http.models import HttpResponse

Condition = Callable[[HttpResponse], bool]
DecodeFn = Callable[[HttpResponse], None]


@dataclass(frozen=True)
class StatusCondition:
    """Inclusive status-code range check."""

    low: int
    high: int

    def matches(self, status_code: int) -> bool:
        return self.low <= status_code <= self.high

    def __call__(self, response: HttpResponse) -> bool:
        return self.matches(response.status_code)


def status(code: int) -> StatusCondition:
    return StatusCondition(int(code), int(code))


def status_range(low: int, high: int) -> StatusCondition:
    if low > high:
        raise ValueError(f"empty status range {low}-{high}")
    return StatusCondition(int(low), int(high))


STATUS_OK = status(httpx.codes.OK)
STATUS_CREATED = status(httpx.codes.CREATED)
STATUS_ACCEPTED = status(httpx.codes.ACCEPTED)
STATUS_BAD_REQUEST = status(httpx.codes.BAD_REQUEST)
STATUS_UNAUTHORIZED = status(httpx.codes.UNAUTHORIZED)
STATUS_FORBIDDEN = status(httpx.codes.FORBIDDEN)
STATUS_NOT_FOUND = status(httpx.codes.NOT_FOUND)
STATUS_UNPROCESSABLE_ENTITY = status(httpx.codes.UNPROCESSABLE_ENTITY)
STATUS_INTERNAL_SERVER_ERROR = status(httpx.codes.INTERNAL_SERVER_ERROR)
STATUS_BAD_GATEWAY = status(httpx.codes.BAD_GATEWAY)

STATUS_1XX = status_range(httpx.codes.CONTINUE, httpx.codes.EARLY_HINTS)
STATUS_2XX = status_range(httpx.codes.OK, httpx.codes.IM_USED)
STATUS_3XX = status_range(httpx.codes.MULTIPLE_CHOICES, httpx.codes.PERMANENT_REDIRECT)
STATUS_4XX = status_range(httpx.codes.BAD_REQUEST, httpx.codes.UNAVAILABLE_FOR_LEGAL_REASONS)
STATUS_5XX = status_range(httpx.codes.INTERNAL_SERVER_ERROR, httpx.codes.NETWORK_AUTHENTICATION_REQUIRED)


@dataclass(frozen=True)
class ResponseHandler:
    decode: DecodeFn
    conditions: tuple[Condition, ...] = ()

    def when(self, condition: Condition) -> ResponseHandler:
        """Return a copy of this handler that also fires when `condition` holds."""
        return replace(self, conditions=self.conditions + (condition,))

    def handle(self, response: HttpResponse) -> int:
        """Run the decode for every satisfied condition; return how many times it ran."""
        if not self.conditions:
            self.decode(response)
            return 1

        fired = 0
        for condition in self.conditions:
            if condition(response):
                self.decode(response)
                fired += 1
        return fired


def json_handler(target: Any) -> ResponseHandler:
    """Decode the body as JSON into `target`."""
    validate_target(target)

    def decode(response: HttpResponse) -> None:
        assign(target, decode_json(response.body_stream().read()))

    return ResponseHandler(decode)


def xml_handler(target: Any) -> ResponseHandler:
    """Decode the body as XML into `target`."""
    validate_target(target)

    def decode(response: HttpResponse) -> None:
        assign(target, decode_xml(response.body_stream().read()))

    return ResponseHandler(decode)


__all__ = [
    "Condition",
    "DecodeFn",
    "ResponseHandler",
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
    "StatusCondition",
    "json_handler",
    "xml_handler",
    "status",
    "status_range",
]
