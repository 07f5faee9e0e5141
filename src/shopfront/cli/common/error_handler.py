"""
CLI Error Handling Utilities

Consistent error handling for CLI commands: map any exception to a
CliError with an exit code, log it, and print it as ``Error: ...`` on
stderr or as a JSON envelope on stdout.
"""

from __future__ import annotations

import functools
import logging
import sys
from typing import Any, Callable, TypeVar

import typer

from shopfront.cli.common.context import get_cli_context
from shopfront.cli.json_formatter import format_json_output
from shopfront.shared.constants import CLIDefaults
from shopfront.shared.error_handling import user_message
from shopfront.shared.errors import (
    ApiError,
    AuthenticationRequiredError,
    AuthorizationError,
    CliError,
    ErrorCode,
    ShopfrontError,
    create_cli_error,
    create_cli_output_error,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
    fallback: str | None = None,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format
        fallback: Message shown for remote failures that carry no
            server message, e.g. "Failed to fetch cart"

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    cli_error = _map_error_to_cli_error(error, command, error_context, fallback)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)

    return cli_error.exit_code


def handle_cli_errors(command: str, fallback: str | None = None) -> Callable[[F], F]:
    """Decorator turning exceptions raised by a command into an exit code.

    ``typer.Exit`` passes through untouched.

    Example:
        >>> @handle_cli_errors("cart show", fallback="Failed to fetch cart")
        ... def cart_show() -> None:
        ...     ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (typer.Exit, typer.Abort):
                raise
            except (Exception, KeyboardInterrupt) as e:  # noqa: BLE001
                exit_code = handle_cli_error(
                    e,
                    command,
                    json_output=get_cli_context().is_json_output_enabled(),
                    fallback=fallback,
                )
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator


def _create_error_context(
    error: BaseException,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    """Create structured error context for logging."""
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    fallback: str | None,
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    if isinstance(error, AuthenticationRequiredError) or (
        isinstance(error, ApiError) and error.code == ErrorCode.API_AUTHENTICATION_FAILED
    ):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=user_message(error, error.message),
            command=command,
            original_error=error,
            exit_code=CLIDefaults.EXIT_LOGIN_REQUIRED,
        )

    if isinstance(error, AuthorizationError) or (
        isinstance(error, ApiError) and error.code == ErrorCode.API_FORBIDDEN
    ):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=user_message(error, error.message),
            command=command,
            original_error=error,
            exit_code=CLIDefaults.EXIT_FORBIDDEN,
        )

    if isinstance(error, ApiError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=user_message(error, fallback or error.message),
            command=command,
            original_error=error,
        )

    if isinstance(error, ShopfrontError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=error.message,
            command=command,
            original_error=error,
        )

    # Handle file system errors
    if isinstance(error, OSError):
        error_context["error_category"] = "file_system"
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            original_error=error,
        )

    # Handle data processing errors
    if isinstance(error, (ValueError, KeyError, TypeError, AttributeError)):
        error_context["error_category"] = "data_processing"
        return create_cli_error(
            message=f"Data processing error: {error}",
            command=command,
            original_error=error,
        )

    # Handle user interrupts
    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context."""
    if isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, ShopfrontError):
        logger.warning(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )
    else:
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            exc_info=error,
            extra={"context": error_context},
        )


def _output_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if json_output:
        _output_json_error(cli_error, error, command, error_context)
    else:
        sys.stderr.write(f"Error: {cli_error.message}\n")


def _output_json_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> None:
    """Output error in JSON format."""
    try:
        error_output = format_json_output(
            success=False,
            command=command,
            errors=[cli_error.message],
            data={
                "error_code": cli_error.code.value,
                "error_type": type(error).__name__,
                "exit_code": cli_error.exit_code,
                "context": error_context,
            },
        )
        sys.stdout.buffer.write(error_output)
        sys.stdout.buffer.write(b"\n")
        sys.stdout.buffer.flush()
    except (OSError, UnicodeEncodeError, TypeError) as output_error:
        cli_output_error = create_cli_output_error(
            message=f"Failed to format JSON output: {output_error}",
            command=command,
            output_type="json",
            original_error=output_error,
        )
        logger.exception(
            "JSON output error: %s",
            cli_output_error.message,
            extra={"context": error_context},
        )
        sys.stderr.write(f"Error: {cli_error.message}\n")
        sys.stderr.write(f"JSON output failed: {cli_output_error.message}\n")


__all__ = ["handle_cli_error", "handle_cli_errors"]
