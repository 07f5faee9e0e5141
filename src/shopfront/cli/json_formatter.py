"""
JSON Output Formatter for the Shopfront CLI

Every command run with ``--json`` writes one envelope:
``{"success", "timestamp", "command", "data", "errors", "warnings"}``.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any

import orjson
from pydantic import BaseModel


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    return str(value)


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "products", "cart show")
        data: The command's output data
        errors: List of error messages
        warnings: List of warning messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(success=True, command="whoami", data={"role": "admin"})
        >>> orjson.loads(output)["data"]
        {'role': 'admin'}
    """
    output = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors or [],
        "warnings": warnings or [],
    }
    return orjson.dumps(output, default=_default, option=orjson.OPT_INDENT_2)


def write_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
) -> None:
    """Write a JSON envelope to stdout."""
    sys.stdout.buffer.write(format_json_output(success, command, data, errors))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()


__all__ = ["format_json_output", "write_json_output"]
