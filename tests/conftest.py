"""
Pytest configuration and shared fixtures for Shopfront tests.

Services are exercised against an in-memory store, a fake clock and a
mocked ``requests.Session`` so no test touches the network or the user's
home directory.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any, Callable
from unittest.mock import Mock

import orjson
import pytest
import requests

from shopfront.cli.common.context import clear_cli_context
from shopfront.cli.common.services import set_services
from shopfront.config import set_config
from shopfront.services import ApiClient, AuthSession
from shopfront.storage import MemoryStore


class FakeClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTimer:
    """Timer that only fires when the test says so."""

    def __init__(self, interval: float, function: Callable[[], None]) -> None:
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function()


class FakeTimerFactory:
    """Records every timer it builds."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, function: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]

    def live(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.started and not t.cancelled]


def make_response(
    status_code: int = 200,
    body: Any = None,
    *,
    raw: bytes | None = None,
) -> Mock:
    """Mock ``requests.Response`` with a JSON (or raw) body."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    if raw is not None:
        content = raw
    elif body is None:
        content = b""
    else:
        content = orjson.dumps(body)
    response.content = content

    def _json() -> Any:
        if not content:
            raise ValueError("No JSON body")
        return orjson.loads(content)

    response.json.side_effect = _json
    return response


@pytest.fixture(autouse=True)
def _reset_cli_state() -> Generator[None, None, None]:
    """Every test starts without CLI context, services or cached settings."""
    clear_cli_context()
    set_services(None)
    set_config(None)
    yield
    clear_cli_context()
    set_services(None)
    set_config(None)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def timer_factory() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def session(mocker) -> Mock:
    """Mocked requests session; set ``session.request.return_value``."""
    mock_session = mocker.Mock(spec=requests.Session)
    mock_session.headers = {}
    mock_session.request.return_value = make_response(200, {})
    return mock_session


@pytest.fixture
def client(store: MemoryStore, session: Mock) -> ApiClient:
    return ApiClient(store, base_url="http://api.test/api", timeout=5, session=session)


@pytest.fixture
def mock_client(mocker) -> Mock:
    """ApiClient double for service-level tests."""
    return mocker.Mock(spec=ApiClient)


@pytest.fixture
def logged_in_store(store: MemoryStore) -> MemoryStore:
    store.set_item("token", "tok-user")
    store.set_item("user", orjson.dumps({"_id": "u1", "name": "Ada", "role": "user"}).decode())
    return store


@pytest.fixture
def admin_store(store: MemoryStore) -> MemoryStore:
    store.set_item("token", "tok-admin")
    store.set_item("user", orjson.dumps({"_id": "a1", "name": "Root", "role": "admin"}).decode())
    return store


@pytest.fixture
def auth(mock_client: Mock, store: MemoryStore) -> AuthSession:
    return AuthSession(mock_client, store)


def sample_products(count: int = 3) -> list[dict[str, Any]]:
    return [
        {
            "_id": f"p{i}",
            "name": f"Product {i}",
            "slug": f"product-{i}",
            "price": 10.0 + i,
            "totalStock": i * 5,
            "isTrending": i % 2 == 0,
            "size": ["sm", "md"],
            "colours": ["red"],
        }
        for i in range(count)
    ]


@pytest.fixture
def response_factory() -> Callable[..., Mock]:
    """Builds mocked responses: ``response_factory(404, {"message": ...})``."""
    return make_response


@pytest.fixture
def products() -> list[dict[str, Any]]:
    return sample_products()
