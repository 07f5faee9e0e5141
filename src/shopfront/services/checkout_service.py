"""Demo checkout.

No payment is taken: the current server cart is posted as an order with
``paymentMethod: "demo"`` and ``status: "confirmed"``.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from shopfront.services.api_client import ApiClient
from shopfront.services.auth_service import AuthSession
from shopfront.services.cart_service import CartService
from shopfront.services.cart_session import CartSession
from shopfront.shared.constants import CartMessages, CheckoutDefaults, Endpoints
from shopfront.shared.errors import DomainError, ErrorCode, ErrorContext
from shopfront.shared.logging import log_operation_success

logger = logging.getLogger(__name__)


class CheckoutService:
    """Places demo orders.

    Args:
        client: Storefront API client
        auth: Session used for the login gate
        cart_service: Source of the cart being ordered
        cart_session: Local cart mirror, emptied after a successful order
    """

    def __init__(
        self,
        client: ApiClient,
        auth: AuthSession,
        cart_service: CartService,
        cart_session: CartSession | None = None,
    ):
        self.client = client
        self.auth = auth
        self.cart_service = cart_service
        self.cart_session = cart_session

    def build_order(self) -> dict[str, Any]:
        """Order payload for the current cart.

        Raises:
            AuthenticationRequiredError: If no session is stored
            DomainError: With EMPTY_CART when there is nothing to order
        """
        self.auth.require_authenticated("checkout")
        cart = self.cart_service.get_cart()
        if not cart.items:
            raise DomainError(
                ErrorCode.EMPTY_CART,
                CartMessages.EMPTY,
                context=ErrorContext(operation="checkout"),
            )

        return {
            "items": cart.items,
            "totalAmount": cart.total_amount,
            "paymentMethod": CheckoutDefaults.PAYMENT_METHOD,
            "status": CheckoutDefaults.STATUS,
        }

    def place_order(self, order: dict[str, Any] | None = None) -> Any:
        """Post the demo order and empty the local cart mirror.

        Args:
            order: Payload from :meth:`build_order`; built here when omitted
        """
        start_time = time.time()
        if order is None:
            order = self.build_order()
        else:
            self.auth.require_authenticated("checkout")
        response = self.client.post(Endpoints.CHECKOUT, json=order)

        if self.cart_session is not None:
            self.cart_session.clear_cart()

        log_operation_success(
            logger=logger,
            operation="checkout",
            duration_ms=(time.time() - start_time) * 1000,
            result_info={"items": len(order["items"])},
        )
        return response


__all__ = ["CheckoutService"]
