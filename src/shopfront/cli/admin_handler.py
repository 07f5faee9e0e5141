"""Admin commands: product table, create, update, delete and dashboard stats.

Every command checks that the stored user is an admin before calling the
API. Mutations write the ``lastCacheClear`` signal so other listings
sharing the state file refetch instead of serving a stale page.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.table import Table

from shopfront.cli.catalog_handler import (
    apply_listing_options,
    fetch_listing,
    render_listing,
)
from shopfront.cli.common.context import get_cli_context
from shopfront.cli.common.error_handler import handle_cli_errors
from shopfront.cli.common.output import emit
from shopfront.cli.common.services import get_services
from shopfront.services import ProductListing, dashboard_stats, mark_cache_cleared
from shopfront.shared.constants import CLIHelp, ListingMessages
from shopfront.shared.errors import create_validation_error

logger = logging.getLogger(__name__)

admin_app = typer.Typer(help=CLIHelp.ADMIN_HELP, no_args_is_help=True)


def build_product_data(
    *,
    name: str | None,
    description: str | None,
    price: float | None,
    stock: int | None,
    category: str | None,
    tags: list[str] | None,
    sizes: list[str] | None,
    colours: list[str] | None,
    trending: bool | None,
    images: list[Path] | None,
) -> dict[str, Any]:
    """Product form data from command options; unset options are left out."""
    data: dict[str, Any] = {
        "name": name,
        "description": description,
        "price": price,
        "totalStock": stock,
        "category": category,
        "isTrending": trending,
    }
    data = {key: value for key, value in data.items() if value is not None}

    if tags:
        data["tags"] = list(tags)
    if sizes:
        data["size"] = list(sizes)
    if colours:
        data["colours"] = list(colours)
    if images:
        data["productImages"] = list(images)
    return data


@admin_app.command("products")
@handle_cli_errors("admin products", fallback=ListingMessages.FETCH_FAILED)
def admin_products_command(
    page: Optional[int] = typer.Option(None, "--page", "-p", min=1, help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Rows per page (10, 25 or 50)"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="createdAt, price, name or popularity"),
    order: Optional[str] = typer.Option(None, "--order", help="asc or desc"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Free-text search"),
) -> None:
    """Admin product table."""
    services = get_services()
    services.auth.require_admin("admin_products")

    catalog = services.settings.catalog
    listing = ProductListing.for_admin(
        services.products,
        services.store,
        services.auth,
        page_sizes=catalog.admin_page_sizes,
        search_delay_seconds=catalog.search_debounce_seconds,
        cache_bust_window_seconds=catalog.cache_bust_window_seconds,
    )
    apply_listing_options(
        listing,
        filters={"sortBy": sort_by, "order": order},
        search=search,
        limit=limit,
        page=page,
    )
    result = fetch_listing(listing, "admin products")
    render_listing(result, "Admin Products", "admin products")


@admin_app.command("create")
@handle_cli_errors("admin create", fallback=ListingMessages.CREATE_FAILED)
def admin_create_command(
    name: str = typer.Option(..., "--name", help="Product name"),
    price: float = typer.Option(..., "--price", min=0, help="Price"),
    description: Optional[str] = typer.Option(None, "--description", help="Description"),
    stock: Optional[int] = typer.Option(None, "--stock", min=0, help="Total stock"),
    category: Optional[str] = typer.Option(None, "--category", help="Category ID"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Tag (repeatable)"),
    sizes: Optional[List[str]] = typer.Option(None, "--size", help="Size option (repeatable)"),
    colours: Optional[List[str]] = typer.Option(None, "--colour", help="Colour option (repeatable)"),
    trending: Optional[bool] = typer.Option(None, "--trending/--not-trending", help="Trending flag"),
    images: Optional[List[Path]] = typer.Option(
        None,
        "--image",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Product image (repeatable)",
    ),
) -> None:
    """Create a product."""
    services = get_services()
    services.auth.require_admin("create_product")

    data = build_product_data(
        name=name,
        description=description,
        price=price,
        stock=stock,
        category=category,
        tags=tags,
        sizes=sizes,
        colours=colours,
        trending=trending,
        images=images,
    )
    response = services.products.create_product(data)
    mark_cache_cleared(services.store)

    emit(
        "admin create",
        response,
        lambda console: console.print(f"[green]Created product {name}[/green]"),
    )


@admin_app.command("update")
@handle_cli_errors("admin update", fallback=ListingMessages.UPDATE_FAILED)
def admin_update_command(
    product_id: str = typer.Argument(..., help="Product ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Product name"),
    price: Optional[float] = typer.Option(None, "--price", min=0, help="Price"),
    description: Optional[str] = typer.Option(None, "--description", help="Description"),
    stock: Optional[int] = typer.Option(None, "--stock", min=0, help="Total stock"),
    category: Optional[str] = typer.Option(None, "--category", help="Category ID"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Tag (repeatable)"),
    sizes: Optional[List[str]] = typer.Option(None, "--size", help="Size option (repeatable)"),
    colours: Optional[List[str]] = typer.Option(None, "--colour", help="Colour option (repeatable)"),
    trending: Optional[bool] = typer.Option(None, "--trending/--not-trending", help="Trending flag"),
    images: Optional[List[Path]] = typer.Option(
        None,
        "--image",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Replacement image (repeatable)",
    ),
) -> None:
    """Update a product; only the given fields are sent."""
    services = get_services()
    services.auth.require_admin("update_product")

    data = build_product_data(
        name=name,
        description=description,
        price=price,
        stock=stock,
        category=category,
        tags=tags,
        sizes=sizes,
        colours=colours,
        trending=trending,
        images=images,
    )
    if not data:
        raise create_validation_error(
            message="Nothing to update: pass at least one field option",
            operation="update_product",
        )

    response = services.products.update_product(product_id, data)
    mark_cache_cleared(services.store)

    emit(
        "admin update",
        response,
        lambda console: console.print(f"[green]Updated product {product_id}[/green]"),
    )


@admin_app.command("delete")
@handle_cli_errors("admin delete", fallback=ListingMessages.DELETE_FAILED)
def admin_delete_command(
    product_id: str = typer.Argument(..., help="Product ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete a product."""
    services = get_services()
    services.auth.require_admin("delete_product")

    if not yes and not get_cli_context().is_json_output_enabled():
        typer.confirm("Are you sure you want to delete this product?", abort=True)

    response = services.products.delete_product(product_id)
    mark_cache_cleared(services.store)

    emit(
        "admin delete",
        response,
        lambda console: console.print(f"Deleted product {product_id}"),
    )


@admin_app.command("stats")
@handle_cli_errors("admin stats", fallback=ListingMessages.FETCH_FAILED)
def admin_stats_command() -> None:
    """Dashboard statistics: products, low stock, trending."""
    services = get_services()
    stats = dashboard_stats(
        services.products,
        services.auth,
        low_stock_threshold=services.settings.catalog.low_stock_threshold,
    )

    def render(console: Any) -> None:
        table = Table(title="Dashboard", show_header=True, header_style="bold magenta")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="green")
        table.add_row("Total Products", str(stats.total_products))
        table.add_row("Total Orders", str(stats.total_orders))
        table.add_row("Low Stock", str(stats.low_stock_products))
        table.add_row("Trending", str(stats.trending_products))
        console.print(table)

    emit("admin stats", stats.to_dict(), render)


__all__ = ["admin_app", "build_product_data"]
