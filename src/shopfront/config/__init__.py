"""Shopfront Configuration Module

Unified access to configuration models and settings management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config, update_and_save_config
- Domain models: API, cache, catalog, storage, logging settings
"""

from __future__ import annotations

from .loader import (
    get_config,
    load_settings,
    reload_config,
    set_config,
    update_and_save_config,
)
from .models import (
    APISettings,
    CacheSettings,
    CatalogSettings,
    LoggingSettings,
    Settings,
    StorageSettings,
)

__all__ = [
    "APISettings",
    "CacheSettings",
    "CatalogSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "get_config",
    "load_settings",
    "reload_config",
    "set_config",
    "update_and_save_config",
]
