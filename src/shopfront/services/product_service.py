"""Product service.

Listing reads go through the product query cache; detail lookups and
cart adds go straight to the API. Admin mutations (create, update,
delete) clear the whole listing cache once the server has accepted them.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from shopfront.services.api_client import ApiClient
from shopfront.services.filters import FilterSet, default_filters
from shopfront.services.multipart import encode_product_form
from shopfront.services.product_cache import ProductQueryCache
from shopfront.shared.constants import Endpoints
from shopfront.shared.logging import log_operation_start, log_operation_success
from shopfront.shared.models import Product, ProductPage

logger = logging.getLogger(__name__)


class ProductService:
    """Product catalog operations.

    Args:
        client: Storefront API client
        cache: Listing cache; a fresh 30 s cache is created when omitted
        cache_enabled: When False every listing call hits the API
    """

    def __init__(
        self,
        client: ApiClient,
        cache: ProductQueryCache | None = None,
        *,
        cache_enabled: bool = True,
    ):
        self.client = client
        self.cache = cache if cache is not None else ProductQueryCache()
        self.cache_enabled = cache_enabled

    def get_products(self, filters: FilterSet | Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Fetch one listing page.

        A fresh cached response is returned without a network call. On a
        miss the response is fetched, cached and returned; fetch errors
        propagate and nothing is cached.

        Args:
            filters: Filter set (or mapping of filter keys); defaults apply
                for anything not given

        Returns:
            Raw response body (``products``, ``totalPages``, ...)
        """
        if filters is None:
            filters = default_filters()
        elif not isinstance(filters, FilterSet):
            filters = FilterSet.from_mapping(filters)

        if self.cache_enabled:
            cached = self.cache.get(filters)
            if cached is not None:
                return cached

        start_time = time.time()
        log_operation_start(logger, "get_products", {"filters": filters.cache_key()})
        response = self.client.get(Endpoints.PRODUCTS, params=filters.to_query_params())

        if self.cache_enabled:
            self.cache.put(filters, response)

        log_operation_success(
            logger=logger,
            operation="get_products",
            duration_ms=(time.time() - start_time) * 1000,
            result_info={"cached": self.cache_enabled},
        )
        return response

    def get_product_page(self, filters: FilterSet | Mapping[str, Any] | None = None) -> ProductPage:
        """Typed view of :meth:`get_products`."""
        response = self.get_products(filters)
        return ProductPage.model_validate(response or {})

    def get_product_by_id(self, product_id: str) -> Product:
        response = self.client.get(Endpoints.PRODUCT_BY_ID.format(product_id=product_id))
        return Product.model_validate(_unwrap_product(response))

    def get_product_by_slug(self, slug: str) -> Product:
        response = self.client.get(Endpoints.PRODUCT_BY_SLUG.format(slug=slug))
        return Product.model_validate(_unwrap_product(response))

    def add_to_cart(self, cart_data: Mapping[str, Any]) -> Any:
        """Add a line to the server cart.

        Args:
            cart_data: ``{"productId", "quantity", "size", "colour"}``
        """
        return self.client.post(Endpoints.CART, json=dict(cart_data))

    def create_product(self, product_data: Mapping[str, Any]) -> Any:
        """Create a product (admin). Sent as multipart form data."""
        form = encode_product_form(product_data)
        response = self.client.post(Endpoints.PRODUCTS, files=form.parts)
        self._invalidate("create_product")
        return response

    def update_product(self, product_id: str, product_data: Mapping[str, Any]) -> Any:
        """Update a product (admin). Sent as multipart form data."""
        form = encode_product_form(product_data)
        response = self.client.put(
            Endpoints.PRODUCT.format(product_id=product_id),
            files=form.parts,
        )
        self._invalidate("update_product")
        return response

    def delete_product(self, product_id: str) -> Any:
        """Delete a product (admin)."""
        response = self.client.delete(Endpoints.PRODUCT.format(product_id=product_id))
        self._invalidate("delete_product")
        return response

    def clear_cache(self) -> int:
        return self.cache.clear()

    @staticmethod
    def get_product_filters() -> FilterSet:
        """Default listing filters."""
        return default_filters()

    def _invalidate(self, operation: str) -> None:
        removed = self.cache.clear()
        logger.info("Product cache cleared after %s (%d entries)", operation, removed)


def _unwrap_product(response: Any) -> dict[str, Any]:
    """Accept both a bare product and ``{"product": {...}}``."""
    if isinstance(response, dict) and isinstance(response.get("product"), dict):
        return response["product"]
    return response or {}


__all__ = ["ProductService"]
