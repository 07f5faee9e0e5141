"""File-backed key-value store.

Persists the whole key space as one JSON object on disk. Every write
rewrites the file through a temporary sibling and an atomic rename, so a
crash mid-write leaves the previous state intact. A corrupt file is logged
and read as empty; the next write replaces it.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

import orjson

from shopfront.shared.errors import ErrorCode, ErrorContext, StorageError
from shopfront.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


class JsonFileStore:
    """KeyValueStore persisted to a JSON file.

    Args:
        path: Location of the state file. Parent directories are created
            on first write.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)

    def clear(self) -> None:
        with self._lock:
            self._write({})

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        context = ErrorContext(
            operation="store_read",
            additional_data={"path": str(self.path)},
        )
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            error = StorageError(
                code=ErrorCode.STORAGE_READ_FAILED,
                message=f"Failed to read state file: {self.path}",
                context=context,
                original_error=e,
            )
            log_operation_error(logger=logger, error=error)
            raise error from e

        if not raw.strip():
            return {}

        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            error = StorageError(
                code=ErrorCode.STORAGE_CORRUPTED,
                message=f"State file is not valid JSON, ignoring it: {self.path}",
                context=context,
                original_error=e,
            )
            log_operation_error(logger=logger, error=error)
            return {}

        if not isinstance(data, dict):
            logger.warning("State file does not hold a JSON object, ignoring it: %s", self.path)
            return {}

        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
            os.replace(tmp_path, self.path)
        except OSError as e:
            error = StorageError(
                code=ErrorCode.STORAGE_WRITE_FAILED,
                message=f"Failed to write state file: {self.path}",
                context=ErrorContext(
                    operation="store_write",
                    additional_data={"path": str(self.path)},
                ),
                original_error=e,
            )
            log_operation_error(logger=logger, error=error)
            raise error from e
