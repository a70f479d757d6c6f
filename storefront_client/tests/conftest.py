"""
Shared fixtures for Storefront Access Client tests.
"""

from typing import Callable, List

import httpx
import pytest

from shared.config import ClientConfig
from storefront_client.app.session import SessionContext, MemoryTokenStore, RecordingNavigator, TOKEN_KEY

BASE_URL = "https://api.test"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config():
    """Client configuration pointing at the test host."""
    return ClientConfig(api_base_url=BASE_URL)


@pytest.fixture
def navigator():
    """Navigator recording login redirects."""
    return RecordingNavigator()


@pytest.fixture
def store():
    """Token store with a signed-in user."""
    return MemoryTokenStore({TOKEN_KEY: "token-abc"})


@pytest.fixture
def session(store, navigator):
    """Interactive session with a stored credential."""
    return SessionContext(store=store, navigator=navigator)


@pytest.fixture
def make_transport():
    """Factory for recording transports."""
    return RecordingTransport
