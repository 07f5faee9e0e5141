"""
Shopfront Constants Module

Centralized constants for the Shopfront client. All magic values
(endpoint paths, storage keys, filter defaults) are defined here.
"""

from .api import (
    APIConfig,
    ApiErrorMessages,
    CheckoutDefaults,
    Endpoints,
    MultipartFields,
    ResponseFields,
    Roles,
)
from .cache import Cache
from .catalog import (
    CatalogDefaults,
    FilterKeys,
    ListingMessages,
    SortField,
    SortOrder,
)
from .cli import CLIDefaults, CLIHelp
from .http_codes import HTTPStatusCodes
from .messages import CartMessages, CheckoutMessages, SessionMessages
from .storage import StorageDefaults, StorageKeys

__all__ = [
    "APIConfig",
    "ApiErrorMessages",
    "CLIDefaults",
    "CLIHelp",
    "Cache",
    "CartMessages",
    "CatalogDefaults",
    "CheckoutDefaults",
    "CheckoutMessages",
    "Endpoints",
    "FilterKeys",
    "HTTPStatusCodes",
    "ListingMessages",
    "MultipartFields",
    "ResponseFields",
    "Roles",
    "SessionMessages",
    "SortField",
    "SortOrder",
    "StorageDefaults",
    "StorageKeys",
]
