"""Listing cache commands.

The listing cache lives in memory, so within one CLI process ``stats``
mostly reports the cross-process ``lastCacheClear`` signal. ``clear``
empties this process's cache and writes the signal so that listings
sharing the state file refetch.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import typer
from rich.table import Table

from shopfront.cli.common.error_handler import handle_cli_errors
from shopfront.cli.common.output import emit
from shopfront.cli.common.services import get_services
from shopfront.services import mark_cache_cleared
from shopfront.shared.constants import CLIHelp, StorageKeys

logger = logging.getLogger(__name__)

cache_app = typer.Typer(help=CLIHelp.CACHE_HELP, no_args_is_help=True)


def _last_clear(raw: str | None) -> str | None:
    if not raw:
        return None
    try:
        return datetime.fromtimestamp(int(raw) / 1000, tz=timezone.utc).isoformat()
    except ValueError:
        return None


@cache_app.command("clear")
@handle_cli_errors("cache clear")
def cache_clear_command() -> None:
    """Clear the listing cache and signal other listings to refetch."""
    services = get_services()
    removed = services.products.clear_cache()
    mark_cache_cleared(services.store)

    emit(
        "cache clear",
        {"removed": removed},
        lambda console: console.print("Product cache cleared"),
    )


@cache_app.command("stats")
@handle_cli_errors("cache stats")
def cache_stats_command() -> None:
    """Show listing cache settings and counters."""
    services = get_services()
    stats = services.products.cache.stats()
    data: dict[str, Any] = {
        "enabled": services.products.cache_enabled,
        "ttlSeconds": services.products.cache.ttl_seconds,
        "entries": stats.entries,
        "freshEntries": stats.fresh_entries,
        "hits": stats.hits,
        "misses": stats.misses,
        "lastCacheClear": _last_clear(services.store.get_item(StorageKeys.LAST_CACHE_CLEAR)),
    }

    def render(console: Any) -> None:
        table = Table(title="Cache Statistics", show_header=True, header_style="bold magenta")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("Enabled", "yes" if data["enabled"] else "no")
        table.add_row("TTL", f"{data['ttlSeconds']:g}s")
        table.add_row("Entries", str(data["entries"]))
        table.add_row("Fresh Entries", str(data["freshEntries"]))
        table.add_row("Hit Rate", f"{stats.hit_ratio:.1%}")
        table.add_row("Last Clear", data["lastCacheClear"] or "never")
        console.print(table)

    emit("cache stats", data, render)


__all__ = ["cache_app"]
