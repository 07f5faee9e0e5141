"""Shared error handling utilities for Shopfront.

Every remote-call failure ends up as one inline message for the user.
This module turns Shopfront errors into that message and logs them with
structured context, so the listing controller, the services and the CLI
all report failures the same way.
"""

from __future__ import annotations

import logging
from typing import Any

from shopfront.shared.errors import (
    ApiError,
    ApplicationError,
    ErrorCode,
    ErrorContextModel,
    InfrastructureError,
    ShopfrontError,
)

logger = logging.getLogger(__name__)


def user_message(error: Exception, fallback: str) -> str:
    """Build the user-visible message for a failed operation.

    The server-provided message wins when present; otherwise the
    caller's fallback text is used. Network failures, validation
    failures and server errors are not told apart beyond that.

    Args:
        error: The exception raised by the operation
        fallback: Generic message for the operation, e.g. "Failed to fetch cart"

    Returns:
        Message suitable for inline display

    Example:
        >>> user_message(ApiError(ErrorCode.API_REQUEST_FAILED, "HTTP 400",
        ...              server_message="Size is required"), "Failed to add to cart")
        'Size is required'
    """
    if isinstance(error, ApiError) and error.server_message:
        return error.server_message
    if isinstance(error, ShopfrontError) and error.code in (
        ErrorCode.AUTHENTICATION_REQUIRED,
        ErrorCode.ADMIN_REQUIRED,
        ErrorCode.EMPTY_CART,
    ):
        return error.message
    return fallback


def map_exception_to_shopfront_error(
    error: Exception,
    operation: str,
    default_code: ErrorCode = ErrorCode.API_REQUEST_FAILED,
) -> ShopfrontError:
    """Map a generic exception to a ShopfrontError.

    Args:
        error: The exception to map
        operation: Operation name where error occurred
        default_code: Default error code if mapping fails

    Returns:
        ShopfrontError instance
    """
    if isinstance(error, ShopfrontError):
        return error

    context = ErrorContextModel(
        operation=operation,
        additional_data={"original_error_type": type(error).__name__},
    )

    if isinstance(error, (ValueError, KeyError, TypeError)):
        return ApplicationError(
            code=ErrorCode.VALIDATION_ERROR,
            message=f"Data processing error: {error}",
            context=context,
            original_error=error,
        )

    return InfrastructureError(
        code=default_code,
        message=f"Unexpected error: {error}",
        context=context,
        original_error=error,
    )


def log_error_with_context(
    error: ShopfrontError,
    operation: str,
    additional_context: dict[str, Any] | None = None,
) -> None:
    """Log a ShopfrontError with structured context.

    Args:
        error: ShopfrontError instance to log
        operation: Operation name where error occurred
        additional_context: Additional context data for logging
    """
    log_context: dict[str, Any] = {
        "operation": operation,
        "error_code": error.code.value,
        "error_type": type(error).__name__,
    }

    if additional_context:
        log_context.update(additional_context)

    if isinstance(error, ApplicationError):
        logger.warning(
            "Application error in %s: %s",
            operation,
            error.message,
            extra={"context": log_context},
        )
    elif isinstance(error, InfrastructureError):
        logger.error(
            "Infrastructure error in %s: %s",
            operation,
            error.message,
            extra={"context": log_context},
        )
    else:
        logger.warning(
            "Shopfront error in %s: %s",
            operation,
            error.message,
            extra={"context": log_context},
        )
