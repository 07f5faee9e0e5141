"""
CLI Configuration Constants

Command names, help text and defaults for the ``shopfront`` command.
"""


class CLIDefaults:
    """Default CLI values."""

    VERSION = "0.1.0"
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_LOGIN_REQUIRED = 3
    EXIT_FORBIDDEN = 4
    EXIT_INTERRUPTED = 130


class CLIHelp:
    """Help text for the Typer application."""

    APP_NAME = "shopfront"
    APP_DESCRIPTION = "Shopfront - storefront client for browsing, cart, checkout and product admin"
    APP_STYLE = "rich"
    VERSION_TEXT = "Shopfront CLI v{version}"

    PRODUCTS_HELP = "List products with filters, sorting and pagination"
    PRODUCT_HELP = "Show a single product by slug"
    LOGIN_HELP = "Log in and store the session token"
    LOGOUT_HELP = "Forget the stored session"
    REGISTER_HELP = "Create an account"
    WHOAMI_HELP = "Show the logged-in user"
    CHECKOUT_HELP = "Place a demo order for the current cart"
    CART_HELP = "Inspect and change the cart"
    ADMIN_HELP = "Admin product management"
    CACHE_HELP = "Inspect or clear the product listing cache"


__all__ = ["CLIDefaults", "CLIHelp"]
