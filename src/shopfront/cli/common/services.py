"""Service wiring for CLI commands.

Builds the object graph (store, API client, session, catalog, cart,
checkout) from configuration once per invocation. Tests install a
prepared container with :func:`set_services`.
"""

from __future__ import annotations

import contextvars
import logging
from dataclasses import dataclass

from shopfront.cli.common.context import get_cli_context
from shopfront.config import Settings, get_config, load_settings
from shopfront.services import (
    ApiClient,
    AuthSession,
    CartService,
    CartSession,
    CheckoutService,
    ProductQueryCache,
    ProductService,
)
from shopfront.shared.logging import setup_structured_logger
from shopfront.shared.protocols import KeyValueStore
from shopfront.storage import JsonFileStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    settings: Settings
    store: KeyValueStore
    client: ApiClient
    auth: AuthSession
    products: ProductService
    cart_session: CartSession
    cart: CartService
    checkout: CheckoutService


def build_services(settings: Settings) -> ServiceContainer:
    """Wire every service from ``settings``."""
    store = JsonFileStore(settings.storage.state_file)
    client = ApiClient.from_settings(settings.api, store)
    auth = AuthSession(client, store)
    products = ProductService(
        client,
        ProductQueryCache(ttl_seconds=settings.cache.ttl_seconds),
        cache_enabled=settings.cache.enabled,
    )
    cart_session = CartSession(store)
    cart = CartService(client, auth)
    checkout = CheckoutService(client, auth, cart, cart_session)

    return ServiceContainer(
        settings=settings,
        store=store,
        client=client,
        auth=auth,
        products=products,
        cart_session=cart_session,
        cart=cart,
        checkout=checkout,
    )


_services_var: contextvars.ContextVar[ServiceContainer | None] = contextvars.ContextVar(
    "shopfront_services",
    default=None,
)


def _configure_logging(settings: Settings) -> None:
    context = get_cli_context()
    setup_structured_logger(
        "shopfront",
        level=context.get_effective_log_level(settings.logging.level),
        log_file=settings.logging.file,
        use_rich_console=settings.logging.rich_console,
    )


def get_services() -> ServiceContainer:
    """Return the container for this invocation, building it on first use."""
    container = _services_var.get()
    if container is not None:
        return container

    context = get_cli_context()
    settings = load_settings(context.config_path) if context.config_path else get_config()
    _configure_logging(settings)

    container = build_services(settings)
    _services_var.set(container)
    logger.debug("Services built for %s", settings.api.base_url)
    return container


def set_services(container: ServiceContainer | None) -> None:
    """Install (or with None, drop) the container used by commands."""
    _services_var.set(container)


__all__ = ["ServiceContainer", "build_services", "get_services", "set_services"]
