"""Product catalog constants.

Filter keys, defaults and presets for product listings.
"""

from typing import ClassVar


class SortField:
    """Values accepted by the ``sortBy`` filter."""

    CREATED_AT = "createdAt"
    PRICE = "price"
    NAME = "name"
    POPULARITY = "popularity"

    ALL: ClassVar[tuple[str, ...]] = (CREATED_AT, PRICE, NAME, POPULARITY)


class SortOrder:
    """Values accepted by the ``order`` filter."""

    ASC = "asc"
    DESC = "desc"

    ALL: ClassVar[tuple[str, ...]] = (ASC, DESC)


class FilterKeys:
    """Wire names of the recognized filter keys."""

    PAGE = "page"
    LIMIT = "limit"
    SORT_BY = "sortBy"
    ORDER = "order"
    CATEGORY = "category"
    TAG = "tag"
    MIN_PRICE = "minPrice"
    MAX_PRICE = "maxPrice"
    IN_STOCK = "inStock"
    IS_TRENDING = "isTrending"
    SEARCH = "search"

    # Changing these does not send the listing back to page 1
    PAGINATION: ClassVar[frozenset[str]] = frozenset({PAGE, LIMIT})


class CatalogDefaults:
    """Listing defaults."""

    PAGE = 1
    LIMIT = 12
    SORT_BY = SortField.CREATED_AT
    ORDER = SortOrder.DESC

    STOREFRONT_PAGE_SIZES: ClassVar[tuple[int, ...]] = (12, 24, 48)
    ADMIN_PAGE_SIZES: ClassVar[tuple[int, ...]] = (10, 25, 50)
    ADMIN_PAGE_SIZE = 10

    SEARCH_DEBOUNCE_SECONDS = 0.3
    CACHE_BUST_WINDOW_SECONDS = 5.0

    LOW_STOCK_THRESHOLD = 10
    DASHBOARD_FETCH_LIMIT = 1000


class ListingMessages:
    """Inline messages shown for failed catalog operations."""

    FETCH_FAILED = "Failed to fetch products"
    FETCH_PRODUCT_FAILED = "Failed to fetch product details"
    ADD_TO_CART_FAILED = "Failed to add to cart"
    CREATE_FAILED = "Failed to create product"
    UPDATE_FAILED = "Failed to update product"
    DELETE_FAILED = "Failed to delete product"


__all__ = [
    "CatalogDefaults",
    "FilterKeys",
    "ListingMessages",
    "SortField",
    "SortOrder",
]
