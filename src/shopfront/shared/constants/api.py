"""Storefront REST API constants.

Endpoint paths and wire-level field names shared by the services. The
multipart field names are a contract with the remote API and must stay
byte-for-byte as they are.
"""


class Endpoints:
    """REST endpoint paths (relative to the API base URL)."""

    PRODUCTS = "/products"
    PRODUCT_BY_ID = "/products/id/{product_id}"
    PRODUCT_BY_SLUG = "/products/{slug}"
    PRODUCT = "/products/{product_id}"

    CART = "/cart"
    CART_ITEM = "/cart/{item_id}"

    CHECKOUT = "/checkout"

    AUTH_LOGIN = "/auth/login"
    AUTH_REGISTER = "/auth/register"


class APIConfig:
    """HTTP client defaults."""

    DEFAULT_BASE_URL = "http://localhost:5000/api"
    DEFAULT_TIMEOUT = 15.0  # seconds
    AUTH_HEADER = "Authorization"
    AUTH_SCHEME = "Bearer"
    USER_AGENT = "shopfront-client"


class ResponseFields:
    """Fields read from API response bodies."""

    MESSAGE = "message"
    TOKEN = "token"
    ROLE = "role"
    PRODUCTS = "products"
    TOTAL_PAGES = "totalPages"
    ITEMS = "items"
    TOTAL_AMOUNT = "totalAmount"


class MultipartFields:
    """Multipart form field names used by product and register uploads."""

    PRODUCT_IMAGES = "productImages"
    PROFILE_IMAGE = "profileImage"
    CATEGORY = "category"

    # List-valued product fields and the repeated field name each element uses
    ARRAY_FIELDS = {
        "tags": "tags[]",
        "size": "size[]",
        "colours": "colours[]",
    }


class Roles:
    """User role values."""

    ADMIN = "admin"
    USER = "user"


class CheckoutDefaults:
    """Values sent with a demo order."""

    PAYMENT_METHOD = "demo"
    STATUS = "confirmed"


class ApiErrorMessages:
    """Messages for API client failures.

    These describe the failure for logs; the user-facing text comes from
    the server message or the calling operation's fallback.
    """

    TIMEOUT = "Request timed out"
    CONNECTION_FAILED = "Could not connect to the storefront API"
    AUTHENTICATION_FAILED = "Authentication failed (HTTP 401)"
    ACCESS_FORBIDDEN = "Access forbidden (HTTP 403)"
    NOT_FOUND = "Resource not found (HTTP 404)"
    CLIENT_ERROR = "Request rejected (HTTP {status_code})"
    SERVER_ERROR = "Server error (HTTP {status_code})"
    REQUEST_FAILED = "Request failed: {reason}"
    INVALID_RESPONSE = "Response body is not valid JSON"


__all__ = [
    "APIConfig",
    "ApiErrorMessages",
    "CheckoutDefaults",
    "Endpoints",
    "MultipartFields",
    "ResponseFields",
    "Roles",
]
