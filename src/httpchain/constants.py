# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared HTTP constants."""

from enum import Enum


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


MIME_TYPE_JSON = "application/json"
MIME_TYPE_XML = "application/xml"
MIME_TYPE_FORM_URLENCODED = "application/x-www-form-urlencoded"

HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"

__all__ = [
    "HEADER_ACCEPT",
    "HEADER_CONTENT_TYPE",
    "HEADER_USER_AGENT",
    "MIME_TYPE_FORM_URLENCODED",
    "MIME_TYPE_JSON",
    "MIME_TYPE_XML",
    "Method",
]
