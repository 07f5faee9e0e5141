"""Catalog browsing configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from shopfront.shared.constants import CatalogDefaults


class CatalogSettings(BaseModel):
    """Listing defaults, search debounce and admin dashboard thresholds."""

    default_page_size: int = Field(default=CatalogDefaults.LIMIT, gt=0)
    page_sizes: list[int] = Field(
        default_factory=lambda: list(CatalogDefaults.STOREFRONT_PAGE_SIZES),
        description="Page sizes offered on the storefront listing",
    )
    admin_page_sizes: list[int] = Field(
        default_factory=lambda: list(CatalogDefaults.ADMIN_PAGE_SIZES),
        description="Page sizes offered on the admin listing",
    )
    search_debounce_seconds: float = Field(
        default=CatalogDefaults.SEARCH_DEBOUNCE_SECONDS,
        ge=0,
        description="Quiet period before search input is applied",
    )
    cache_bust_window_seconds: float = Field(
        default=CatalogDefaults.CACHE_BUST_WINDOW_SECONDS,
        ge=0,
        description="How recent a cache-clear signal must be to force a refetch",
    )
    low_stock_threshold: int = Field(
        default=CatalogDefaults.LOW_STOCK_THRESHOLD,
        gt=0,
    )

    @model_validator(mode="after")
    def _default_page_size_is_offered(self) -> CatalogSettings:
        if self.default_page_size not in self.page_sizes:
            msg = (
                f"default_page_size {self.default_page_size} "
                f"is not one of page_sizes {self.page_sizes}"
            )
            raise ValueError(msg)
        return self


__all__ = ["CatalogSettings"]
