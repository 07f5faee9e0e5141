"""Cache-related constants."""


class Cache:
    """Product query cache constants."""

    TTL_SECONDS = 30.0
    ENABLED = True


__all__ = ["Cache"]
