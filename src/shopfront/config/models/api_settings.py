"""API configuration models.

Connection settings for the remote storefront REST API.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from shopfront.shared.constants import APIConfig


class APISettings(BaseModel):
    """Storefront API configuration.

    The client never retries on its own; a failed call is reported once.
    """

    base_url: str = Field(
        default=APIConfig.DEFAULT_BASE_URL,
        description="Base URL of the storefront REST API",
    )
    timeout: float = Field(
        default=APIConfig.DEFAULT_TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            msg = f"base_url must start with http:// or https://, got {value!r}"
            raise ValueError(msg)
        return value.rstrip("/")


__all__ = ["APISettings"]
