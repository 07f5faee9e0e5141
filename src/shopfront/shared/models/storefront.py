"""Storefront API Response Models.

Pydantic models for the records the storefront API returns. The server
owns these shapes, so every model keeps unknown fields (``extra="allow"``)
and accepts both the wire names (``_id``, ``totalStock``) and the Python
attribute names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shopfront.shared.constants import Roles


class StorefrontModel(BaseModel):
    """Base model for API records."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump using the API's field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Product(StorefrontModel):
    """Product record.

    Example:
        >>> p = Product.model_validate({"_id": "p1", "name": "Tee", "price": 19.5})
        >>> p.id, p.total_stock
        ('p1', 0)
    """

    id: str = Field(..., alias="_id", description="Server identity")
    name: str = Field(default="", description="Display name")
    slug: str | None = Field(default=None, description="URL slug for public lookups")
    description: str = Field(default="")
    price: float = Field(default=0.0, ge=0)
    total_stock: int = Field(default=0, alias="totalStock")
    in_stock: bool | None = Field(default=None, alias="inStock")
    product_images: list[str] = Field(default_factory=list, alias="productImages")
    tags: list[str] = Field(default_factory=list)
    colours: list[str] = Field(default_factory=list)
    size: list[str] = Field(default_factory=list)
    category: Any = Field(default=None)
    is_trending: bool = Field(default=False, alias="isTrending")


class ProductPage(StorefrontModel):
    """One page of a product listing."""

    products: list[Product] = Field(default_factory=list)
    total_pages: int = Field(default=1, alias="totalPages")
    current_page: int | None = Field(default=None, alias="currentPage")
    total_products: int | None = Field(default=None, alias="totalProducts")


class CartItem(StorefrontModel):
    """Cart line: a product in a chosen size and colour.

    ``id`` is the line identity used for removal; lines built locally
    before the server has assigned one fall back to the product id.
    """

    id: str | None = Field(default=None, alias="_id")
    product_id: str = Field(..., alias="productId")
    size: str = Field(default="")
    colour: str = Field(default="")
    quantity: int = Field(default=1, ge=1)
    name: str | None = Field(default=None)
    price: float | None = Field(default=None)

    @property
    def identity(self) -> str:
        return self.id or self.product_id


class Cart(StorefrontModel):
    """Server-side cart."""

    items: list[dict[str, Any]] = Field(default_factory=list)
    total_items: int = Field(default=0, alias="totalItems")
    total_amount: float = Field(default=0.0, alias="totalAmount")


class AuthUser(StorefrontModel):
    """User record returned by login and register."""

    id: str | None = Field(default=None, alias="_id")
    name: str | None = None
    email: str | None = None
    role: str = Field(default=Roles.USER)
    token: str | None = Field(default=None, repr=False)

    @property
    def is_admin(self) -> bool:
        return self.role == Roles.ADMIN


__all__ = [
    "AuthUser",
    "Cart",
    "CartItem",
    "Product",
    "ProductPage",
    "StorefrontModel",
]
