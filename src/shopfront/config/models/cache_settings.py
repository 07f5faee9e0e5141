"""Cache configuration model.

Settings for the in-memory product listing cache.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from shopfront.shared.constants import Cache


class CacheSettings(BaseModel):
    """Product query cache configuration."""

    enabled: bool = Field(default=Cache.ENABLED, description="Enable listing cache")
    ttl_seconds: float = Field(
        default=Cache.TTL_SECONDS,
        gt=0,
        description="Maximum age of a cached listing in seconds",
    )


__all__ = ["CacheSettings"]
