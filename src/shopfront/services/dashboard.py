"""Admin dashboard statistics.

There is no stats endpoint, so the numbers are computed from one large
product listing page.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from shopfront.services.auth_service import AuthSession
from shopfront.services.filters import default_filters
from shopfront.services.product_service import ProductService
from shopfront.shared.constants import CatalogDefaults
from shopfront.shared.models import ProductPage


@dataclass(frozen=True)
class DashboardStats:
    total_products: int
    low_stock_products: int
    trending_products: int
    total_orders: int = 0  # no orders endpoint

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def dashboard_stats(
    product_service: ProductService,
    auth: AuthSession | None = None,
    *,
    low_stock_threshold: int = CatalogDefaults.LOW_STOCK_THRESHOLD,
    fetch_limit: int = CatalogDefaults.DASHBOARD_FETCH_LIMIT,
) -> DashboardStats:
    """Count products, low-stock products and trending products.

    A product is low on stock when ``0 < totalStock < low_stock_threshold``;
    sold-out products are not counted.

    Args:
        product_service: Catalog service
        auth: When given, the stored user must be an admin
        low_stock_threshold: Exclusive upper stock bound for "low stock"
        fetch_limit: Page size used to pull the whole catalog

    Raises:
        AuthorizationError: If ``auth`` is given and the user is not an admin
    """
    if auth is not None:
        auth.require_admin("dashboard_stats")

    response = product_service.get_products(default_filters(limit=fetch_limit))
    products = ProductPage.model_validate(response or {}).products

    return DashboardStats(
        total_products=len(products),
        low_stock_products=sum(
            1 for p in products if 0 < p.total_stock < low_stock_threshold
        ),
        trending_products=sum(1 for p in products if p.is_trending),
    )


__all__ = ["DashboardStats", "dashboard_stats"]
