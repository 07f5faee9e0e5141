"""Data models for Shopfront."""

from .storefront import AuthUser, Cart, CartItem, Product, ProductPage, StorefrontModel

__all__ = [
    "AuthUser",
    "Cart",
    "CartItem",
    "Product",
    "ProductPage",
    "StorefrontModel",
]
