"""Server-side cart operations. Every call requires a logged-in session."""

from __future__ import annotations

import logging
from typing import Any

from shopfront.services.api_client import ApiClient
from shopfront.services.auth_service import AuthSession
from shopfront.shared.constants import Endpoints
from shopfront.shared.errors import ErrorCode, create_validation_error
from shopfront.shared.models import Cart

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, client: ApiClient, auth: AuthSession):
        self.client = client
        self.auth = auth

    def get_cart(self) -> Cart:
        self.auth.require_authenticated("get_cart")
        response = self.client.get(Endpoints.CART)
        return Cart.model_validate(response or {})

    def update_quantity(self, item_id: str, quantity: int) -> Any:
        """Set a line's quantity; quantities below one are rejected locally."""
        self.auth.require_authenticated("update_cart_quantity")
        if quantity < 1:
            raise create_validation_error(
                message=f"Quantity must be at least 1, got {quantity}",
                field="quantity",
                operation="update_cart_quantity",
                code=ErrorCode.INVALID_QUANTITY,
            )
        return self.client.put(
            Endpoints.CART_ITEM.format(item_id=item_id),
            json={"quantity": quantity},
        )

    def remove_item(self, item_id: str) -> Any:
        self.auth.require_authenticated("remove_cart_item")
        return self.client.delete(Endpoints.CART_ITEM.format(item_id=item_id))

    def clear(self) -> Any:
        self.auth.require_authenticated("clear_cart")
        return self.client.delete(Endpoints.CART)


__all__ = ["CartService"]
