"""Shared fixtures.

``client`` talks to the in-process ``FakeNode`` through
``httpx.ASGITransport``; ``mock_client`` builds a client on top of an
``httpx.MockTransport`` handler for raw HTTP-level scenarios.
"""

import httpx
import pytest
from fake_node import FakeNode
from nearclient.client import Client
from nearclient.transport import HttpxTransport

NODE_URL = "http://node.test"


@pytest.fixture
def node():
    return FakeNode()


@pytest.fixture
async def client(node):
    """Client wired to the in-process fake node."""
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=node.app))  # type: ignore[arg-type]
    client = Client.connect(NODE_URL, transport=HttpxTransport(client=http))
    yield client
    await client.aclose()


@pytest.fixture
def mock_client():
    """Factory: ``mock_client(handler)`` → client over ``httpx.MockTransport``."""

    def factory(handler, **kwargs):
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return Client.connect(NODE_URL, transport=HttpxTransport(client=http), **kwargs)

    return factory

