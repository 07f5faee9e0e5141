"""Shopfront services: API client, catalog, session, cart and checkout."""

from .api_client import ApiClient
from .auth_service import AuthSession
from .cart_service import CartService
from .cart_session import CartSession
from .checkout_service import CheckoutService
from .dashboard import DashboardStats, dashboard_stats
from .debounce import Debouncer
from .filters import FilterSet, default_filters
from .listing import ListingResult, ProductListing, mark_cache_cleared
from .multipart import MultipartForm, encode_product_form, encode_register_form
from .product_cache import CacheEntry, CacheStats, ProductQueryCache
from .product_service import ProductService

__all__ = [
    "ApiClient",
    "AuthSession",
    "CacheEntry",
    "CacheStats",
    "CartService",
    "CartSession",
    "CheckoutService",
    "DashboardStats",
    "Debouncer",
    "FilterSet",
    "ListingResult",
    "MultipartForm",
    "ProductListing",
    "ProductQueryCache",
    "ProductService",
    "dashboard_stats",
    "default_filters",
    "encode_product_form",
    "encode_register_form",
    "mark_cache_cleared",
]
