"""Configuration domain models."""

from .api_settings import APISettings
from .app_settings import LoggingSettings, StorageSettings
from .cache_settings import CacheSettings
from .catalog_settings import CatalogSettings
from .settings import Settings

__all__ = [
    "APISettings",
    "CacheSettings",
    "CatalogSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
]
