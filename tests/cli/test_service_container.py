"""Tests for wiring the service container from settings."""

from shopfront.cli.common.services import build_services
from shopfront.config import Settings
from shopfront.storage import JsonFileStore


def test_build_services_uses_configured_cache(tmp_path):
    settings = Settings(
        cache={"ttl_seconds": 5, "enabled": False},
        storage={"state_file": tmp_path / "state.json"},
    )

    container = build_services(settings)

    assert container.products.cache.ttl_seconds == 5
    assert container.products.cache_enabled is False


def test_build_services_shares_one_store(tmp_path):
    settings = Settings(storage={"state_file": tmp_path / "state.json"})

    container = build_services(settings)

    assert isinstance(container.store, JsonFileStore)
    assert container.store.path == tmp_path / "state.json"
    assert container.auth.store is container.store
    assert container.cart_session.store is container.store
