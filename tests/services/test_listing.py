"""Tests for the product listing controller."""

import pytest

from shopfront.services.auth_service import AuthSession
from shopfront.services.listing import ProductListing, mark_cache_cleared
from shopfront.services.product_cache import ProductQueryCache
from shopfront.services.product_service import ProductService
from shopfront.shared.errors import ApiError, DomainError, ErrorCode

NOW_MS = 1_700_000_000_000


@pytest.fixture
def product_service(mock_client, clock):
    return ProductService(mock_client, ProductQueryCache(ttl_seconds=30, clock=clock))


@pytest.fixture
def listing(product_service, store, timer_factory):
    return ProductListing(
        product_service,
        store,
        timer_factory=timer_factory,
        clock_ms=lambda: NOW_MS,
    )


class TestFilters:
    def test_starts_with_defaults(self, listing):
        assert listing.filters.page == 1
        assert listing.filters.limit == 12
        assert listing.has_active_filters() is False

    def test_set_filter_resets_page(self, listing):
        listing.set_page(3)

        filters = listing.set_filter("category", "shoes")

        assert filters.page == 1
        assert listing.filters.category == "shoes"

    def test_set_page_keeps_filters(self, listing):
        listing.set_filter("tag", "summer")

        listing.set_page(2)

        assert listing.filters.tag == "summer"
        assert listing.filters.page == 2

    def test_set_page_size(self, listing):
        listing.set_page(4)

        listing.set_page_size(24)

        assert listing.filters.limit == 24
        assert listing.filters.page == 4

    def test_page_size_outside_presets(self, listing):
        with pytest.raises(DomainError) as exc_info:
            listing.set_page_size(10)

        assert exc_info.value.code == ErrorCode.INVALID_PAGE_SIZE

    def test_clear_filters(self, listing):
        listing.set_filter("sortBy", "price")
        listing.set_page_size(48)

        filters = listing.clear_filters()

        assert filters.sort_by == "createdAt"
        assert filters.limit == 12
        assert listing.has_active_filters() is False

    def test_subscribe_and_unsubscribe(self, listing):
        seen = []
        unsubscribe = listing.subscribe(seen.append)

        listing.set_page(2)
        unsubscribe()
        listing.set_page(3)

        assert [f.page for f in seen] == [2]


class TestSearch:
    def test_burst_applies_once(self, listing, timer_factory):
        seen = []
        listing.subscribe(seen.append)

        for text in ("a", "ap", "app"):
            listing.search_input(text)

        assert listing.filters.search == ""
        assert listing.search_pending is True

        timer_factory.last.fire()

        assert len(seen) == 1
        assert listing.filters.search == "app"
        assert listing.search_pending is False

    def test_search_trims_and_resets_page(self, listing):
        listing.set_page(5)

        listing.search_input("  linen shirt ")
        listing.flush_search()

        assert listing.filters.search == "linen shirt"
        assert listing.filters.page == 1

    def test_clear_filters_drops_pending_search(self, listing, timer_factory):
        listing.search_input("tee")

        listing.clear_filters()
        timer_factory.last.fire()

        assert listing.filters.search == ""

    def test_close_drops_pending_search(self, listing):
        listing.search_input("tee")
        listing.close()
        assert listing.flush_search() is False


class TestFetch:
    def test_success(self, listing, mock_client, products):
        mock_client.get.return_value = {"products": products, "totalPages": 4}

        result = listing.fetch()

        assert result.ok
        assert [p.id for p in result.products] == ["p0", "p1", "p2"]
        assert result.total_pages == 4
        assert result.filters == listing.filters

    def test_error_uses_server_message(self, listing, mock_client):
        mock_client.get.side_effect = ApiError(
            ErrorCode.API_REQUEST_FAILED,
            "Request rejected (HTTP 400)",
            status_code=400,
            server_message="Invalid category",
        )

        result = listing.fetch()

        assert result.ok is False
        assert result.products == []
        assert result.error == "Failed to fetch products: Invalid category"

    def test_error_without_server_message(self, listing, mock_client):
        mock_client.get.side_effect = ApiError(ErrorCode.NETWORK_ERROR, "Could not connect")

        assert listing.fetch().error == "Failed to fetch products"

    def test_malformed_response(self, listing, mock_client):
        mock_client.get.return_value = {"products": [{"name": "no id"}]}

        assert listing.fetch().error == "Failed to fetch products"

    def test_second_fetch_is_served_from_cache(self, listing, mock_client):
        mock_client.get.return_value = {"products": []}

        listing.fetch()
        listing.fetch()

        assert mock_client.get.call_count == 1


class TestCacheBust:
    def test_no_signal(self, listing, mock_client):
        assert listing.refresh_if_cache_busted() is None
        mock_client.get.assert_not_called()

    def test_recent_signal_refetches(self, listing, mock_client, store):
        mock_client.get.return_value = {"products": []}
        listing.fetch()
        mark_cache_cleared(store, clock_ms=lambda: NOW_MS - 2_000)

        result = listing.refresh_if_cache_busted()

        assert result is not None
        assert result.ok
        assert mock_client.get.call_count == 2

    def test_old_signal_is_ignored(self, listing, mock_client, store):
        mark_cache_cleared(store, clock_ms=lambda: NOW_MS - 5_000)

        assert listing.refresh_if_cache_busted() is None
        mock_client.get.assert_not_called()

    def test_malformed_signal(self, listing, store):
        store.set_item("lastCacheClear", "yesterday")
        assert listing.refresh_if_cache_busted() is None

    def test_mark_cache_cleared_writes_epoch_ms(self, store):
        mark_cache_cleared(store, clock_ms=lambda: 1234.9)
        assert store.get_item("lastCacheClear") == "1234"


class TestAdminListing:
    def test_admin_presets(self, product_service, admin_store, mock_client):
        listing = ProductListing.for_admin(
            product_service,
            admin_store,
            AuthSession(mock_client, admin_store),
        )

        assert listing.filters.limit == 10
        listing.set_page_size(50)
        with pytest.raises(DomainError):
            listing.set_page_size(12)

    def test_non_admin_gets_inline_error(self, product_service, logged_in_store, mock_client):
        listing = ProductListing.for_admin(
            product_service,
            logged_in_store,
            AuthSession(mock_client, logged_in_store),
        )

        result = listing.fetch()

        assert result.error == "Admin access required"
        mock_client.get.assert_not_called()

    def test_admin_fetch(self, product_service, admin_store, mock_client, products):
        mock_client.get.return_value = {"products": products}
        listing = ProductListing.for_admin(
            product_service,
            admin_store,
            AuthSession(mock_client, admin_store),
        )

        result = listing.fetch()

        assert result.ok
        assert mock_client.get.call_args.kwargs["params"]["limit"] == "10"
