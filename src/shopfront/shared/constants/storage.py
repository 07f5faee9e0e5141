"""Persistence keys.

Keys under which session state lives in the key-value store.
"""


class StorageKeys:
    """Key-value store keys."""

    TOKEN = "token"
    USER = "user"
    CART_ITEMS = "cartItems"
    LAST_CACHE_CLEAR = "lastCacheClear"


class StorageDefaults:
    """File-backed store defaults."""

    STATE_FILE = ".shopfront/state.json"
    ENCODING = "utf-8"


__all__ = ["StorageDefaults", "StorageKeys"]
