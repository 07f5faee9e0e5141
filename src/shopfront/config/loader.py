"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for Settings instance
- Configuration update and save operations
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable

import toml
from dotenv import load_dotenv
from pydantic import ValidationError

from shopfront.config.models.settings import Settings
from shopfront.shared.error_handling import log_error_with_context
from shopfront.shared.errors import ApplicationError, ErrorCode, ErrorContext, create_config_error

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("shopfront.toml"),
    Path("config/shopfront.toml"),
    Path.home() / ".shopfront" / "config.toml",
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    def __init__(self) -> None:
        self._instance: Settings | None = None
        self._lock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def set_config(self, settings: Settings | None) -> None:
        """Replace the global settings instance (None forces a reload)."""
        with self._lock:
            self._instance = settings

    def reload_config(self) -> Settings:
        """Reload the global settings instance from configuration files."""
        with self._lock:
            self._instance = load_settings()

        return self._instance

    def update_and_save_config(
        self,
        updater: Callable[[Settings], None],
        config_path: Path | str = DEFAULT_CONFIG_PATHS[0],
    ) -> None:
        """Update configuration, validate, save to file, and reload global cache.

        Args:
            updater: Callable that modifies Settings object in-place
            config_path: Path to save the configuration file

        Raises:
            ApplicationError: If validation fails or save operation fails
        """
        config_path = Path(config_path)

        with self._lock:
            try:
                current = self.get_config()
                updated = current.model_copy(deep=True)
                updater(updated)
                updated = Settings.model_validate(updated.model_dump())
                updated.to_toml_file(config_path)
                self._instance = updated

                logger.info("Configuration updated and saved to %s", config_path)

            except (ValidationError, OSError, ValueError, TypeError) as e:
                logger.exception("Failed to update and save configuration")
                raise ApplicationError(
                    code=ErrorCode.CONFIGURATION_ERROR,
                    message=f"Configuration update failed: {e}",
                    context=ErrorContext(
                        operation="update_and_save_config",
                        additional_data={"config_path": str(config_path)},
                    ),
                    original_error=e,
                ) from e


def _load_env_file(env_file: Path = Path(".env")) -> bool:
    """Load environment variables from a .env file if one exists.

    Variables already set in the process environment win over the file.

    Returns:
        True if a file was loaded
    """
    if not env_file.exists():
        return False

    loaded = load_dotenv(env_file, override=False)
    logger.debug("Loaded environment from %s", env_file)
    return bool(loaded)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML file or the environment.

    Args:
        config_path: Optional TOML file. When omitted the default locations
            are tried in order, then environment variables alone.

    Returns:
        Settings instance

    Raises:
        ApplicationError: If the file cannot be read or the configuration is invalid
    """
    _load_env_file()

    if not config_path:
        config_path = next((p for p in DEFAULT_CONFIG_PATHS if p.exists()), None)

    try:
        if config_path is None:
            return Settings()
        return Settings.from_toml_file(config_path)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        error = create_config_error(
            message=f"Invalid configuration: {e}",
            config_key=".".join(str(part) for part in first.get("loc", ())) or None,
            operation="load_settings",
            original_error=e,
        )
    except toml.TomlDecodeError as e:
        error = create_config_error(
            message=f"Configuration file is not valid TOML: {config_path}: {e}",
            operation="load_settings",
            original_error=e,
        )
    except OSError as e:
        error = create_config_error(
            message=f"Cannot read configuration file: {config_path}",
            operation="load_settings",
            original_error=e,
        )

    log_error_with_context(error, "load_settings", {"config_path": str(config_path or "")})
    raise error from error.original_error


_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def set_config(settings: Settings | None) -> None:
    """Install a settings instance globally (used by the CLI and tests)."""
    _loader.set_config(settings)


def reload_config() -> Settings:
    """Reload the global settings instance from configuration files."""
    return _loader.reload_config()


def update_and_save_config(
    updater: Callable[[Settings], None],
    config_path: Path | str = DEFAULT_CONFIG_PATHS[0],
) -> None:
    """Update configuration, validate, save to file, and reload global cache."""
    _loader.update_and_save_config(updater, config_path)


__all__ = [
    "DEFAULT_CONFIG_PATHS",
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
    "set_config",
    "update_and_save_config",
]
