"""
Shopfront Typer CLI Application

Command-line front end for the storefront client: browse products, manage
the cart, check out, and administer products.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from shopfront import __version__
from shopfront.cli.admin_handler import admin_app
from shopfront.cli.cache_handler import cache_app
from shopfront.cli.cart_handler import cart_app, checkout_command
from shopfront.cli.catalog_handler import product_command, products_command
from shopfront.cli.common.context import CliContext, LogLevel, set_cli_context
from shopfront.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from shopfront.cli.session_handler import (
    login_command,
    logout_command,
    register_command,
    whoami_command,
)
from shopfront.shared.constants import CLIHelp


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def main_callback(
    verbose: int,
    log_level: LogLevel | None,
    json_output: bool,
    config_path: Path | None,
    version: bool,
) -> None:
    """
    Process the common options before any command runs.

    Args:
        verbose: Verbosity level (count-based)
        log_level: Explicit logging level, if given
        json_output: Whether to output in JSON format
        config_path: TOML configuration file, if given
        version: Whether to show version information
    """
    if version:
        version_callback(value=True)

    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
        config_path=config_path,
    )
    set_cli_context(context)


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=True,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
)


@app.callback(invoke_without_command=True)
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[Optional[LogLevel], log_level_option] = None,
    json_output: Annotated[bool, json_output_option] = False,
    config_path: Annotated[Optional[Path], config_option] = None,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Main CLI callback with error handling."""
    try:
        main_callback(verbose, log_level, json_output, config_path, version)
    except typer.Exit:
        raise
    except Exception as e:
        from shopfront.cli.common.error_handler import handle_cli_error

        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


app.command("products", help=CLIHelp.PRODUCTS_HELP)(products_command)
app.command("product", help=CLIHelp.PRODUCT_HELP)(product_command)
app.command("login", help=CLIHelp.LOGIN_HELP)(login_command)
app.command("logout", help=CLIHelp.LOGOUT_HELP)(logout_command)
app.command("register", help=CLIHelp.REGISTER_HELP)(register_command)
app.command("whoami", help=CLIHelp.WHOAMI_HELP)(whoami_command)
app.command("checkout", help=CLIHelp.CHECKOUT_HELP)(checkout_command)

app.add_typer(cart_app, name="cart", help=CLIHelp.CART_HELP)
app.add_typer(admin_app, name="admin", help=CLIHelp.ADMIN_HELP)
app.add_typer(cache_app, name="cache", help=CLIHelp.CACHE_HELP)


if __name__ == "__main__":
    app()
