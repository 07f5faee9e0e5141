"""Storage and logging configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from shopfront.shared.constants import StorageDefaults


class StorageSettings(BaseModel):
    """Where session state (token, user, cart mirror) is persisted."""

    state_file: Path = Field(
        default=Path.home() / StorageDefaults.STATE_FILE,
        description="JSON file backing the key-value store",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(default=True, description="Use rich console output")


__all__ = ["LoggingSettings", "StorageSettings"]
