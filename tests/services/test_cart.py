"""Tests for the local cart mirror and the server cart service."""

import orjson
import pytest

from shopfront.services.auth_service import AuthSession
from shopfront.services.cart_service import CartService
from shopfront.services.cart_session import CartSession
from shopfront.shared.errors import (
    AuthenticationRequiredError,
    DomainError,
    ErrorCode,
)
from shopfront.shared.models import CartItem


class TestCartSession:
    def test_starts_empty(self, store):
        cart = CartSession(store)

        assert cart.items == []
        assert cart.count == 0

    def test_add_then_remove(self, store):
        cart = CartSession(store)

        cart.add_to_cart(CartItem(product_id="p1", size="md", colour="red"))
        assert cart.count == 1

        cart.remove_from_cart("p1")

        assert cart.count == 0
        assert orjson.loads(store.get_item("cartItems")) == []

    def test_persists_and_reloads(self, store):
        CartSession(store).add_to_cart({"_id": "line1", "productId": "p1", "quantity": 2})

        reloaded = CartSession(store)

        assert reloaded.count == 1
        assert reloaded.items[0]["quantity"] == 2

    def test_add_uses_wire_names(self, store):
        cart = CartSession(store)

        cart.add_to_cart(CartItem(product_id="p1", quantity=3, size="lg", colour="blue"))

        assert cart.items[0] == {
            "productId": "p1",
            "quantity": 3,
            "size": "lg",
            "colour": "blue",
        }

    def test_remove_by_line_id(self, store):
        cart = CartSession(store)
        cart.add_to_cart({"_id": "line1", "productId": "p1"})
        cart.add_to_cart({"_id": "line2", "productId": "p1"})

        cart.remove_from_cart("line1")

        assert [item["_id"] for item in cart.items] == ["line2"]

    def test_clear(self, store):
        cart = CartSession(store)
        cart.add_to_cart({"productId": "p1"})

        cart.clear_cart()

        assert cart.count == 0
        assert store.get_item("cartItems") is None

    def test_update_count_leaves_items(self, store):
        cart = CartSession(store)
        cart.add_to_cart({"productId": "p1"})

        cart.update_cart_count(7)

        assert cart.count == 7
        assert len(cart.items) == 1

    @pytest.mark.parametrize("raw", ["{broken", '{"not": "a list"}'])
    def test_corrupt_state_starts_empty(self, store, raw):
        store.set_item("cartItems", raw)

        cart = CartSession(store)

        assert cart.items == []
        assert cart.count == 0


class TestCartService:
    @pytest.fixture
    def cart_service(self, mock_client, logged_in_store):
        return CartService(mock_client, AuthSession(mock_client, logged_in_store))

    def test_get_cart(self, cart_service, mock_client):
        mock_client.get.return_value = {
            "items": [{"_id": "l1", "productId": "p1", "quantity": 2}],
            "totalAmount": 40.0,
            "totalItems": 2,
        }

        cart = cart_service.get_cart()

        mock_client.get.assert_called_once_with("/cart")
        assert cart.total_amount == 40.0
        assert cart.total_items == 2
        assert len(cart.items) == 1

    def test_empty_body_is_empty_cart(self, cart_service, mock_client):
        mock_client.get.return_value = None
        assert cart_service.get_cart().items == []

    def test_update_quantity(self, cart_service, mock_client):
        cart_service.update_quantity("l1", 3)

        mock_client.put.assert_called_once_with("/cart/l1", json={"quantity": 3})

    def test_quantity_below_one_rejected(self, cart_service, mock_client):
        with pytest.raises(DomainError) as exc_info:
            cart_service.update_quantity("l1", 0)

        assert exc_info.value.code == ErrorCode.INVALID_QUANTITY
        mock_client.put.assert_not_called()

    def test_remove_and_clear(self, cart_service, mock_client):
        cart_service.remove_item("l1")
        cart_service.clear()

        assert [c.args for c in mock_client.delete.call_args_list] == [("/cart/l1",), ("/cart",)]

    def test_requires_login(self, mock_client, store):
        service = CartService(mock_client, AuthSession(mock_client, store))

        with pytest.raises(AuthenticationRequiredError):
            service.get_cart()

        mock_client.get.assert_not_called()
