"""User-facing message constants for session, cart and checkout flows."""


class SessionMessages:
    """Authentication gate messages."""

    LOGIN_REQUIRED = "Please login to continue"
    ADMIN_REQUIRED = "Admin access required"
    LOGIN_FAILED = "Login failed"
    REGISTER_FAILED = "Registration failed"


class CartMessages:
    """Cart operation messages."""

    FETCH_FAILED = "Failed to fetch cart"
    UPDATE_FAILED = "Failed to update quantity"
    REMOVE_FAILED = "Failed to remove item"
    CLEAR_FAILED = "Failed to clear cart"
    EMPTY = "Your cart is empty"


class CheckoutMessages:
    """Checkout messages."""

    ORDER_FAILED = "Failed to place order. Please try again."


__all__ = ["CartMessages", "CheckoutMessages", "SessionMessages"]
