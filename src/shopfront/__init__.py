"""
Shopfront - storefront REST API client

Product browsing with a short-lived listing cache, cart and demo checkout,
session handling, and admin product management, plus the ``shopfront``
command-line front end.
"""

__version__ = "0.1.0"
