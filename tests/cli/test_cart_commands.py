"""Tests for account, cart and checkout commands."""

import orjson

from shopfront.cli.typer_app import app
from shopfront.shared.errors import ApiError, ErrorCode

CART = {
    "items": [
        {
            "_id": "l1",
            "productId": "p1",
            "quantity": 2,
            "size": "md",
            "colour": "red",
            "product": {"name": "Linen Shirt", "price": 20.0},
        },
    ],
    "totalAmount": 40.0,
    "totalItems": 2,
}


class TestSessionCommands:
    def test_login(self, runner, services, store):
        services.client.post.return_value = {"_id": "u1", "name": "Ada", "role": "user", "token": "tok"}

        result = runner.invoke(app, ["login", "--email", "ada@example.com", "--password", "pw"])

        assert result.exit_code == 0, result.output
        assert "Logged in as Ada" in result.output
        assert store.get_item("token") == "tok"

    def test_login_json_hides_token(self, runner, services, parse_json):
        services.client.post.return_value = {"_id": "u1", "name": "Ada", "token": "tok"}

        result = runner.invoke(app, ["--json", "login", "-e", "ada@example.com", "--password", "pw"])

        body = parse_json(result.stdout)
        assert "token" not in body["data"]
        assert body["data"]["name"] == "Ada"

    def test_login_rejected(self, runner, services, store):
        services.client.post.side_effect = ApiError(
            ErrorCode.API_AUTHENTICATION_FAILED,
            "Authentication failed (HTTP 401)",
            status_code=401,
            server_message="Invalid credentials",
        )

        result = runner.invoke(app, ["login", "--email", "a@b.c", "--password", "bad"])

        assert result.exit_code == 3
        assert "Invalid credentials" in result.output
        assert store.get_item("token") is None

    def test_login_prompts(self, runner, services):
        services.client.post.return_value = {"token": "tok"}

        result = runner.invoke(app, ["login"], input="ada@example.com\npw\n")

        assert result.exit_code == 0, result.output
        services.client.post.assert_called_once_with(
            "/auth/login",
            json={"email": "ada@example.com", "password": "pw"},
        )

    def test_register_with_profile_image(self, runner, services, tmp_path):
        image = tmp_path / "me.png"
        image.write_bytes(b"PNG")
        services.client.post.return_value = {"token": "t"}

        result = runner.invoke(
            app,
            [
                "register",
                "--name",
                "Ada",
                "--email",
                "ada@example.com",
                "--password",
                "pw",
                "--profile-image",
                str(image),
            ],
        )

        assert result.exit_code == 0, result.output
        names = [name for name, _ in services.client.post.call_args.kwargs["files"]]
        assert names == ["name", "email", "password", "profileImage"]

    def test_logout(self, runner, as_user, store):
        result = runner.invoke(app, ["logout"])

        assert result.exit_code == 0
        assert store.get_item("token") is None

    def test_whoami(self, runner, as_user):
        result = runner.invoke(app, ["whoami"])

        assert result.exit_code == 0
        assert "Ada <ada@example.com>" in result.output

    def test_whoami_logged_out(self, runner, services):
        result = runner.invoke(app, ["whoami"])

        assert result.exit_code == 3
        assert "Please login to continue" in result.output


class TestCartCommands:
    def test_show(self, runner, as_user):
        as_user.client.get.return_value = CART

        result = runner.invoke(app, ["cart", "show"])

        assert result.exit_code == 0, result.output
        assert "Linen Shirt" in result.output
        assert "Total: $40.00" in result.output
        assert as_user.cart_session.count == 2

    def test_show_empty(self, runner, as_user):
        as_user.client.get.return_value = {"items": []}

        result = runner.invoke(app, ["cart", "show"])

        assert "Your cart is empty" in result.output

    def test_show_requires_login(self, runner, services):
        result = runner.invoke(app, ["cart", "show"])

        assert result.exit_code == 3
        services.client.get.assert_not_called()

    def test_add_with_options(self, runner, as_user, store):
        result = runner.invoke(app, ["cart", "add", "p1", "-q", "2", "--size", "lg", "--colour", "blue"])

        assert result.exit_code == 0, result.output
        as_user.client.post.assert_called_once_with(
            "/cart",
            json={"productId": "p1", "quantity": 2, "size": "lg", "colour": "blue"},
        )
        assert orjson.loads(store.get_item("cartItems"))[0]["productId"] == "p1"

    def test_add_defaults_from_product(self, runner, as_user, products):
        as_user.client.get.return_value = products[0]

        result = runner.invoke(app, ["cart", "add", "p0"])

        assert result.exit_code == 0, result.output
        as_user.client.get.assert_called_once_with("/products/id/p0")
        sent = as_user.client.post.call_args.kwargs["json"]
        assert sent["size"] == "sm"
        assert sent["colour"] == "red"

    def test_add_server_message(self, runner, as_user):
        as_user.client.post.side_effect = ApiError(
            ErrorCode.API_REQUEST_FAILED,
            "Request rejected (HTTP 400)",
            status_code=400,
            server_message="Out of stock",
        )

        result = runner.invoke(app, ["cart", "add", "p1", "--size", "md", "--colour", "red"])

        assert result.exit_code == 1
        assert "Error: Out of stock" in result.output
        assert as_user.cart_session.count == 0

    def test_update_rejects_zero(self, runner, as_user):
        result = runner.invoke(app, ["cart", "update", "l1", "0"])

        assert result.exit_code == 1
        assert "Quantity must be at least 1" in result.output
        as_user.client.put.assert_not_called()

    def test_update(self, runner, as_user):
        result = runner.invoke(app, ["cart", "update", "l1", "3"])

        assert result.exit_code == 0
        as_user.client.put.assert_called_once_with("/cart/l1", json={"quantity": 3})

    def test_remove(self, runner, as_user):
        as_user.cart_session.add_to_cart({"_id": "l1", "productId": "p1"})

        result = runner.invoke(app, ["cart", "remove", "l1"])

        assert result.exit_code == 0
        as_user.client.delete.assert_called_once_with("/cart/l1")
        assert as_user.cart_session.count == 0

    def test_clear_failure_uses_fallback(self, runner, as_user):
        as_user.client.delete.side_effect = ApiError(ErrorCode.NETWORK_ERROR, "Could not connect")

        result = runner.invoke(app, ["cart", "clear"])

        assert result.exit_code == 1
        assert "Failed to clear cart" in result.output


class TestCheckoutCommand:
    def test_checkout(self, runner, as_user):
        as_user.client.get.return_value = CART
        as_user.client.post.return_value = {"orderId": "o1"}

        result = runner.invoke(app, ["checkout", "--yes"])

        assert result.exit_code == 0, result.output
        assert "Order placed successfully" in result.output
        args, kwargs = as_user.client.post.call_args
        assert args == ("/checkout",)
        assert kwargs["json"]["status"] == "confirmed"
        assert kwargs["json"]["totalAmount"] == 40.0

    def test_confirmation_declined(self, runner, as_user):
        as_user.client.get.return_value = CART

        result = runner.invoke(app, ["checkout"], input="n\n")

        assert result.exit_code == 1
        as_user.client.post.assert_not_called()

    def test_empty_cart(self, runner, as_user):
        as_user.client.get.return_value = {"items": []}

        result = runner.invoke(app, ["checkout", "--yes"])

        assert result.exit_code == 1
        assert "Your cart is empty" in result.output

    def test_order_failure(self, runner, as_user):
        as_user.client.get.return_value = CART
        as_user.client.post.side_effect = ApiError(ErrorCode.API_SERVER_ERROR, "Server error", status_code=500)

        result = runner.invoke(app, ["checkout", "--yes"])

        assert result.exit_code == 1
        assert "Failed to place order. Please try again." in result.output
