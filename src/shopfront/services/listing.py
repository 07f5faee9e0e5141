"""Product listing controller.

Holds the active filter set for a product listing, applies filter and
pagination changes, debounces free-text search and turns fetch failures
into the inline message the listing shows. Front ends subscribe to filter
changes and call :meth:`ProductListing.fetch` to render a page.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from pydantic import ValidationError

from shopfront.services.auth_service import AuthSession
from shopfront.services.debounce import Debouncer, TimerFactory
from shopfront.services.filters import FilterSet, default_filters
from shopfront.services.product_service import ProductService
from shopfront.shared.constants import (
    CatalogDefaults,
    FilterKeys,
    ListingMessages,
    SessionMessages,
    StorageKeys,
)
from shopfront.shared.error_handling import (
    map_exception_to_shopfront_error,
    user_message,
)
from shopfront.shared.errors import (
    ApiError,
    ErrorCode,
    ShopfrontError,
    create_validation_error,
)
from shopfront.shared.logging import log_operation_error
from shopfront.shared.models import Product, ProductPage
from shopfront.shared.protocols import KeyValueStore

logger = logging.getLogger(__name__)

FilterListener = Callable[[FilterSet], Any]
MillisClock = Callable[[], float]


def _epoch_millis() -> float:
    return time.time() * 1000


def mark_cache_cleared(store: KeyValueStore, clock_ms: MillisClock = _epoch_millis) -> None:
    """Record that the product cache was just cleared.

    Listings that see a recent signal clear their own cache and refetch.
    """
    store.set_item(StorageKeys.LAST_CACHE_CLEAR, str(int(clock_ms())))


@dataclass
class ListingResult:
    """What a listing shows after a fetch.

    ``error`` holds the inline message when the fetch failed, in which
    case ``products`` is empty.
    """

    products: list[Product] = field(default_factory=list)
    total_pages: int = 1
    filters: FilterSet = field(default_factory=default_filters)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProductListing:
    """State of one product listing view.

    Args:
        product_service: Catalog service used for fetches
        store: Key-value store carrying the ``lastCacheClear`` signal
        page_sizes: Page sizes ``set_page_size`` accepts
        default_page_size: Limit used by the default filter set
        search_delay_seconds: Debounce delay for search input
        cache_bust_window_seconds: How recent a cache-clear signal must be
            for ``refresh_if_cache_busted`` to refetch
        auth: Session checked when ``admin_only`` is set
        admin_only: Refuse to fetch unless the stored user is an admin
        timer_factory: Timer factory for the search debouncer
        clock_ms: Epoch-milliseconds clock for the cache-bust check
    """

    def __init__(
        self,
        product_service: ProductService,
        store: KeyValueStore,
        *,
        page_sizes: Sequence[int] = CatalogDefaults.STOREFRONT_PAGE_SIZES,
        default_page_size: int = CatalogDefaults.LIMIT,
        search_delay_seconds: float = CatalogDefaults.SEARCH_DEBOUNCE_SECONDS,
        cache_bust_window_seconds: float = CatalogDefaults.CACHE_BUST_WINDOW_SECONDS,
        auth: AuthSession | None = None,
        admin_only: bool = False,
        timer_factory: TimerFactory | None = None,
        clock_ms: MillisClock = _epoch_millis,
    ):
        self.product_service = product_service
        self.store = store
        self.page_sizes = tuple(page_sizes)
        self.default_page_size = default_page_size
        self.cache_bust_window_seconds = cache_bust_window_seconds
        self.auth = auth
        self.admin_only = admin_only
        self._clock_ms = clock_ms

        self._lock = threading.Lock()
        self._filters = default_filters(limit=default_page_size)
        self._listeners: list[FilterListener] = []

        debounce_kwargs: dict[str, Any] = {"delay_seconds": search_delay_seconds}
        if timer_factory is not None:
            debounce_kwargs["timer_factory"] = timer_factory
        self._search = Debouncer(self._commit_search, **debounce_kwargs)

    @classmethod
    def for_admin(
        cls,
        product_service: ProductService,
        store: KeyValueStore,
        auth: AuthSession,
        **kwargs: Any,
    ) -> ProductListing:
        """Admin product table: admin gate and the admin page sizes."""
        kwargs.setdefault("page_sizes", CatalogDefaults.ADMIN_PAGE_SIZES)
        kwargs.setdefault("default_page_size", CatalogDefaults.ADMIN_PAGE_SIZE)
        return cls(product_service, store, auth=auth, admin_only=True, **kwargs)

    @property
    def filters(self) -> FilterSet:
        with self._lock:
            return self._filters

    def subscribe(self, listener: FilterListener) -> Callable[[], None]:
        """Call ``listener`` with every new filter set.

        Returns:
            A function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, update: Callable[[FilterSet], FilterSet]) -> FilterSet:
        with self._lock:
            self._filters = update(self._filters)
            filters = self._filters
            listeners = list(self._listeners)

        for listener in listeners:
            listener(filters)
        return filters

    def set_filter(self, key: str, value: Any) -> FilterSet:
        """Change one filter; anything but page/limit goes back to page 1."""
        return self._replace(lambda current: current.with_changes(**{key: value}))

    def set_page(self, page: int) -> FilterSet:
        return self._replace(lambda current: current.with_changes(page=page))

    def set_page_size(self, size: int) -> FilterSet:
        if size not in self.page_sizes:
            raise create_validation_error(
                message=(
                    f"Page size {size} is not one of "
                    f"{', '.join(str(s) for s in self.page_sizes)}"
                ),
                field=FilterKeys.LIMIT,
                operation="set_page_size",
                code=ErrorCode.INVALID_PAGE_SIZE,
            )
        return self._replace(lambda current: current.with_changes(limit=size))

    def search_input(self, text: str) -> None:
        """Buffer raw search input; it is applied after the input goes quiet."""
        self._search.push(text)

    def flush_search(self) -> bool:
        """Apply pending search input now."""
        return self._search.flush()

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    def _commit_search(self, text: str) -> None:
        self._replace(lambda current: current.with_changes(search=text.strip()))

    def clear_filters(self) -> FilterSet:
        """Back to the defaults; pending search input is dropped."""
        self._search.cancel()
        return self._replace(lambda _current: default_filters(limit=self.default_page_size))

    def has_active_filters(self) -> bool:
        return self.filters.has_active_filters()

    def fetch(self) -> ListingResult:
        """Fetch the page for the active filters.

        Failures come back as ``ListingResult.error`` rather than raising.
        """
        filters = self.filters

        if self.admin_only and (self.auth is None or not self.auth.is_admin()):
            return ListingResult(filters=filters, error=SessionMessages.ADMIN_REQUIRED)

        try:
            response = self.product_service.get_products(filters)
            page = ProductPage.model_validate(response or {})
        except (ShopfrontError, ValidationError) as e:
            error = map_exception_to_shopfront_error(e, "fetch_listing")
            log_operation_error(
                logger=logger,
                error=error,
                operation="fetch_listing",
                additional_context={"filters": filters.cache_key()},
            )
            return ListingResult(filters=filters, error=_fetch_error_message(error))

        return ListingResult(
            products=page.products,
            total_pages=page.total_pages or 1,
            filters=filters,
        )

    def refresh_if_cache_busted(self) -> ListingResult | None:
        """Clear the cache and refetch when a cache-clear signal is recent.

        Returns:
            The fresh result, or None when no recent signal was found
        """
        raw = self.store.get_item(StorageKeys.LAST_CACHE_CLEAR)
        if not raw:
            return None
        try:
            cleared_at = int(raw)
        except ValueError:
            logger.warning("Ignoring malformed %s value: %r", StorageKeys.LAST_CACHE_CLEAR, raw)
            return None

        if self._clock_ms() - cleared_at >= self.cache_bust_window_seconds * 1000:
            return None

        self.product_service.clear_cache()
        return self.fetch()

    def close(self) -> None:
        """Drop pending search input."""
        self._search.cancel()


def _fetch_error_message(error: ShopfrontError) -> str:
    if isinstance(error, ApiError) and error.server_message:
        return f"{ListingMessages.FETCH_FAILED}: {error.server_message}"
    return user_message(error, ListingMessages.FETCH_FAILED)


__all__ = ["ListingResult", "ProductListing", "mark_cache_cleared"]
