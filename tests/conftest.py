"""Test configuration and fixtures."""

from typing import Callable
from typing import List
from typing import Optional

import httpx
import pytest

from miot.client import AsyncMiotClient
from miot.client import MiotClient
from miot.models import Credentials
from miot.models import HTTPConfig


class RecordingHandler:
    """MockTransport handler that records requests and replies with fixed text."""

    def __init__(
        self,
        text: str = '{"devices": []}',
        status_code: int = 200,
        error: Optional[Exception] = None,
    ) -> None:
        self.text = text
        self.status_code = status_code
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def credentials():
    """Credentials fixture."""
    return Credentials(app_id="test_app_id", access_token="test_access_token")


@pytest.fixture
def http_config():
    """HTTP configuration fixture."""
    return HTTPConfig(
        host="api.home.mi.com",
        port=443,
        use_tls=True,
        timeout=10.0,
        user_agent="test-agent/1.0.0",
    )


@pytest.fixture
def handler():
    """Default recording handler returning a JSON object."""
    return RecordingHandler()


@pytest.fixture
def make_client(http_config) -> Callable[..., MiotClient]:
    """Build a sync client wired to a recording handler."""
    def factory(handler: RecordingHandler) -> MiotClient:
        return MiotClient(
            "test_app_id",
            "test_access_token",
            http_config=http_config,
            http_transport=httpx.MockTransport(handler),
        )
    return factory


@pytest.fixture
def make_async_client(http_config) -> Callable[..., AsyncMiotClient]:
    """Build an async client wired to a recording handler."""
    def factory(handler: RecordingHandler) -> AsyncMiotClient:
        return AsyncMiotClient(
            "test_app_id",
            "test_access_token",
            http_config=http_config,
            http_transport=httpx.MockTransport(handler),
        )
    return factory


@pytest.fixture
def subscription_envelope():
    """Multi-status envelope as returned by subscription calls."""
    return {
        "expired": 36000,
        "properties": [
            {"pid": "AAAB.1.1", "status": 0},
            {"pid": "AAAC.1.1", "status": -704002023},
            {"pid": "AAAD.1.1", "status": 0},
            {"pid": "AAAD.1.2", "status": 705202023},
        ],
    }


@pytest.fixture
def clean_env(monkeypatch):
    """Remove MIOT_* variables from the environment."""
    for name in (
        "MIOT_APP_ID",
        "MIOT_ACCESS_TOKEN",
        "MIOT_SPEC_NS",
        "MIOT_HOST",
        "MIOT_PORT",
        "MIOT_USE_TLS",
        "MIOT_TIMEOUT",
        "MIOT_USER_AGENT",
        "MIOT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
