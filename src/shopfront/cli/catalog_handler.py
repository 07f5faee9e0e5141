"""Product browsing commands: ``products`` and ``product``."""

from __future__ import annotations

import logging
from typing import Any, Optional

import typer

from shopfront.cli.common.error_handler import handle_cli_errors
from shopfront.cli.common.output import emit, product_detail_table, products_table
from shopfront.cli.common.services import ServiceContainer, get_services
from shopfront.services import ListingResult, ProductListing
from shopfront.shared.constants import FilterKeys, ListingMessages
from shopfront.shared.errors import create_cli_error

logger = logging.getLogger(__name__)


def build_listing(services: ServiceContainer) -> ProductListing:
    """Storefront listing configured from the ``catalog`` settings."""
    catalog = services.settings.catalog
    return ProductListing(
        services.products,
        services.store,
        page_sizes=catalog.page_sizes,
        default_page_size=catalog.default_page_size,
        search_delay_seconds=catalog.search_debounce_seconds,
        cache_bust_window_seconds=catalog.cache_bust_window_seconds,
    )


def apply_listing_options(
    listing: ProductListing,
    *,
    filters: dict[str, Any],
    search: str | None,
    limit: int | None,
    page: int | None,
) -> None:
    """Apply command-line filters in the order a user would: filters,
    search, page size, then page (so the explicit page survives the
    page-1 reset)."""
    for key, value in filters.items():
        if value is not None:
            listing.set_filter(key, value)

    if search is not None:
        listing.search_input(search)
        listing.flush_search()

    if limit is not None:
        listing.set_page_size(limit)

    if page is not None:
        listing.set_page(page)


def fetch_listing(listing: ProductListing, command: str) -> ListingResult:
    result = listing.refresh_if_cache_busted() or listing.fetch()
    if result.error:
        raise create_cli_error(message=result.error, command=command)
    return result


def listing_payload(result: ListingResult) -> dict[str, Any]:
    return {
        "products": [product.to_wire() for product in result.products],
        "totalPages": result.total_pages,
        "filters": result.filters.to_mapping(),
    }


def render_listing(result: ListingResult, title: str, command: str) -> None:
    def render(console: Any) -> None:
        if not result.products:
            console.print("[yellow]No products found[/yellow]")
            return
        console.print(products_table(result.products, title=title))
        console.print(f"Page {result.filters.page} of {result.total_pages}")

    emit(command, listing_payload(result), render)


@handle_cli_errors("products", fallback=ListingMessages.FETCH_FAILED)
def products_command(
    page: Optional[int] = typer.Option(None, "--page", "-p", min=1, help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Products per page (12, 24 or 48)"),
    sort_by: Optional[str] = typer.Option(None, "--sort-by", help="createdAt, price, name or popularity"),
    order: Optional[str] = typer.Option(None, "--order", help="asc or desc"),
    category: Optional[str] = typer.Option(None, "--category", help="Category filter"),
    tag: Optional[str] = typer.Option(None, "--tag", help="Tag filter"),
    min_price: Optional[float] = typer.Option(None, "--min-price", help="Minimum price"),
    max_price: Optional[float] = typer.Option(None, "--max-price", help="Maximum price"),
    in_stock: Optional[bool] = typer.Option(
        None,
        "--in-stock/--out-of-stock",
        help="Only products in stock, or only sold-out ones",
    ),
    trending: Optional[bool] = typer.Option(
        None,
        "--trending/--not-trending",
        help="Only trending products, or only non-trending ones",
    ),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Free-text search"),
) -> None:
    """List products with filters, sorting and pagination.

    Examples:
        shopfront products --category shoes --sort-by price --order asc
        shopfront products --search "linen shirt" --limit 24
    """
    services = get_services()
    listing = build_listing(services)
    apply_listing_options(
        listing,
        filters={
            FilterKeys.SORT_BY: sort_by,
            FilterKeys.ORDER: order,
            FilterKeys.CATEGORY: category,
            FilterKeys.TAG: tag,
            FilterKeys.MIN_PRICE: min_price,
            FilterKeys.MAX_PRICE: max_price,
            FilterKeys.IN_STOCK: in_stock,
            FilterKeys.IS_TRENDING: trending,
        },
        search=search,
        limit=limit,
        page=page,
    )
    result = fetch_listing(listing, "products")
    render_listing(result, "Products", "products")


@handle_cli_errors("product", fallback=ListingMessages.FETCH_PRODUCT_FAILED)
def product_command(
    slug: str = typer.Argument(..., help="Product slug"),
) -> None:
    """Show a single product by slug."""
    services = get_services()
    product = services.products.get_product_by_slug(slug)
    emit(
        "product",
        product.to_wire(),
        lambda console: console.print(product_detail_table(product)),
    )


__all__ = [
    "apply_listing_options",
    "build_listing",
    "fetch_listing",
    "product_command",
    "products_command",
    "render_listing",
]
