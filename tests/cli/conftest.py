"""Fixtures for CLI tests: a service container over an in-memory store."""

from __future__ import annotations

from typing import Any

import orjson
import pytest
from typer.testing import CliRunner

from shopfront.cli.common.services import ServiceContainer, set_services
from shopfront.config import Settings
from shopfront.services import (
    AuthSession,
    CartService,
    CartSession,
    CheckoutService,
    ProductQueryCache,
    ProductService,
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def services(mock_client, store, clock) -> ServiceContainer:
    """Container installed for the CLI; the API client is a mock."""
    auth = AuthSession(mock_client, store)
    cart = CartService(mock_client, auth)
    cart_session = CartSession(store)
    container = ServiceContainer(
        settings=Settings(),
        store=store,
        client=mock_client,
        auth=auth,
        products=ProductService(mock_client, ProductQueryCache(clock=clock)),
        cart_session=cart_session,
        cart=cart,
        checkout=CheckoutService(mock_client, auth, cart, cart_session),
    )
    set_services(container)
    return container


def login_as(store, role: str = "user") -> None:
    store.set_item("token", f"tok-{role}")
    store.set_item(
        "user",
        orjson.dumps({"_id": "u1", "name": "Ada", "email": "ada@example.com", "role": role}).decode(),
    )


@pytest.fixture
def as_user(services, store) -> ServiceContainer:
    login_as(store, "user")
    return services


@pytest.fixture
def as_admin(services, store) -> ServiceContainer:
    login_as(store, "admin")
    return services


def json_body(output: str) -> dict[str, Any]:
    """Decode the JSON envelope a ``--json`` command printed."""
    start = output.index("{")
    return orjson.loads(output[start:])


@pytest.fixture
def parse_json():
    return json_body
