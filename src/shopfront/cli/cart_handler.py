"""Cart and checkout commands.

``cart`` is a Typer sub-app (show, add, update, remove, clear); ``checkout``
is a top-level command. Every command needs a logged-in session.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import typer

from shopfront.cli.common.context import get_cli_context
from shopfront.cli.common.error_handler import handle_cli_errors
from shopfront.cli.common.output import cart_table, emit
from shopfront.cli.common.services import get_services
from shopfront.shared.constants import (
    CartMessages,
    CheckoutMessages,
    CLIHelp,
    ListingMessages,
)
from shopfront.shared.models import CartItem

logger = logging.getLogger(__name__)

# Used when a product offers no size or colour options
DEFAULT_SIZE = "md"
DEFAULT_COLOUR = "default"

cart_app = typer.Typer(help=CLIHelp.CART_HELP, no_args_is_help=True)


@cart_app.command("show")
@handle_cli_errors("cart show", fallback=CartMessages.FETCH_FAILED)
def cart_show_command() -> None:
    """Show the server cart."""
    services = get_services()
    cart = services.cart.get_cart()
    services.cart_session.update_cart_count(cart.total_items or len(cart.items))

    def render(console: Any) -> None:
        if not cart.items:
            console.print(CartMessages.EMPTY)
            return
        console.print(cart_table(cart.items, cart.total_amount))

    emit("cart show", cart.to_wire(), render)


@cart_app.command("add")
@handle_cli_errors("cart add", fallback=ListingMessages.ADD_TO_CART_FAILED)
def cart_add_command(
    product_id: str = typer.Argument(..., help="Product ID"),
    quantity: int = typer.Option(1, "--quantity", "-q", min=1, help="Quantity"),
    size: Optional[str] = typer.Option(None, "--size", help="Size (default: first offered)"),
    colour: Optional[str] = typer.Option(None, "--colour", help="Colour (default: first offered)"),
) -> None:
    """Add a product to the cart."""
    services = get_services()
    services.auth.require_authenticated("add_to_cart")

    if size is None or colour is None:
        product = services.products.get_product_by_id(product_id)
        size = size or (product.size[0] if product.size else DEFAULT_SIZE)
        colour = colour or (product.colours[0] if product.colours else DEFAULT_COLOUR)

    item = CartItem(product_id=product_id, quantity=quantity, size=size, colour=colour)
    cart_data = item.model_dump(by_alias=True, include={"product_id", "quantity", "size", "colour"})
    response = services.products.add_to_cart(cart_data)
    services.cart_session.add_to_cart(item)

    emit(
        "cart add",
        {"item": cart_data, "cartCount": services.cart_session.count, "response": response},
        lambda console: console.print(f"[green]Added {product_id} to cart[/green]"),
    )


@cart_app.command("update")
@handle_cli_errors("cart update", fallback=CartMessages.UPDATE_FAILED)
def cart_update_command(
    item_id: str = typer.Argument(..., help="Cart item ID"),
    quantity: int = typer.Argument(..., help="New quantity (at least 1)"),
) -> None:
    """Change the quantity of a cart line."""
    services = get_services()
    response = services.cart.update_quantity(item_id, quantity)
    emit(
        "cart update",
        response,
        lambda console: console.print(f"Quantity of {item_id} set to {quantity}"),
    )


@cart_app.command("remove")
@handle_cli_errors("cart remove", fallback=CartMessages.REMOVE_FAILED)
def cart_remove_command(
    item_id: str = typer.Argument(..., help="Cart item ID"),
) -> None:
    """Remove a line from the cart."""
    services = get_services()
    response = services.cart.remove_item(item_id)
    services.cart_session.remove_from_cart(item_id)
    emit(
        "cart remove",
        response,
        lambda console: console.print(f"Removed {item_id}"),
    )


@cart_app.command("clear")
@handle_cli_errors("cart clear", fallback=CartMessages.CLEAR_FAILED)
def cart_clear_command() -> None:
    """Empty the cart."""
    services = get_services()
    services.cart.clear()
    services.cart_session.clear_cart()
    emit("cart clear", {"cartCount": 0}, lambda console: console.print("Cart cleared"))


@handle_cli_errors("checkout", fallback=CheckoutMessages.ORDER_FAILED)
def checkout_command(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Place a demo order for the current cart (no payment is taken)."""
    services = get_services()
    order = services.checkout.build_order()

    if not yes and not get_cli_context().is_json_output_enabled():
        typer.confirm(
            f"Place order for {len(order['items'])} item(s), "
            f"total ${float(order['totalAmount']):.2f}?",
            abort=True,
        )

    response = services.checkout.place_order(order)
    emit(
        "checkout",
        {"order": order, "response": response},
        lambda console: console.print("[green]Order placed successfully![/green]"),
    )


__all__ = ["cart_app", "checkout_command"]
