# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from httpchain.config import HttpSettings
from httpchain.http.adapters import StubHttpClient
from httpchain.http.httpx_client import HttpxClient


@pytest.fixture
def stub():
    return StubHttpClient()


@pytest.fixture
def mock_client():
    """Build an HttpxClient whose transport is an httpx.MockTransport handler."""
    clients = []

    def factory(handler, **settings_kwargs):
        client = HttpxClient(
            HttpSettings(**settings_kwargs),
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
