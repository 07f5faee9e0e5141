"""Rich table rendering shared by CLI commands."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from rich.console import Console
from rich.table import Table

from shopfront.cli.common.context import get_cli_context
from shopfront.cli.json_formatter import write_json_output
from shopfront.shared.models import Product

console = Console()


def emit(command: str, data: Any, render: Callable[[Console], None]) -> None:
    """Write ``data`` as JSON in ``--json`` mode, otherwise call ``render``."""
    if get_cli_context().is_json_output_enabled():
        write_json_output(success=True, command=command, data=data)
    else:
        render(console)


def _price(value: Any) -> str:
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return "-"


def products_table(products: Iterable[Product], title: str | None = None) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Slug")
    table.add_column("Price", justify="right", style="green")
    table.add_column("Stock", justify="right")
    table.add_column("Trending", justify="center")

    for product in products:
        table.add_row(
            product.id,
            product.name,
            product.slug or "",
            _price(product.price),
            str(product.total_stock),
            "yes" if product.is_trending else "",
        )
    return table


def product_detail_table(product: Product) -> Table:
    table = Table(title=product.name, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("ID", product.id)
    table.add_row("Slug", product.slug or "")
    table.add_row("Price", _price(product.price))
    table.add_row("Stock", str(product.total_stock))
    table.add_row("Sizes", ", ".join(product.size))
    table.add_row("Colours", ", ".join(product.colours))
    table.add_row("Tags", ", ".join(product.tags))
    table.add_row("Trending", "yes" if product.is_trending else "no")
    if product.description:
        table.add_row("Description", product.description)
    return table


def cart_table(items: Iterable[dict[str, Any]], total_amount: float) -> Table:
    table = Table(title="Your Shopping Cart", show_header=True, header_style="bold magenta")
    table.add_column("Item ID", style="dim")
    table.add_column("Product", style="cyan")
    table.add_column("Size")
    table.add_column("Colour")
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right", style="green")

    for item in items:
        product = item.get("product") or {}
        table.add_row(
            str(item.get("_id", "")),
            str(product.get("name") or item.get("name") or item.get("productId", "")),
            str(item.get("size") or ""),
            str(item.get("colour") or ""),
            str(item.get("quantity", "")),
            _price(product.get("price", item.get("price"))),
        )

    table.caption = f"Total: {_price(total_amount)}"
    return table


__all__ = [
    "cart_table",
    "console",
    "emit",
    "product_detail_table",
    "products_table",
]
