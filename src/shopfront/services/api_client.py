"""Storefront REST API client.

Thin wrapper over a ``requests.Session`` that attaches the stored bearer
token, decodes JSON bodies and converts every transport or HTTP failure
into an :class:`~shopfront.shared.errors.ApiError`. Calls are never
retried; a failure is reported to the caller exactly once.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from shopfront.config.models.api_settings import APISettings
from shopfront.shared.constants import (
    APIConfig,
    ApiErrorMessages,
    HTTPStatusCodes,
    ResponseFields,
    StorageKeys,
)
from shopfront.shared.errors import ApiError, ErrorCode, ErrorContext
from shopfront.shared.logging import log_api_call, log_operation_error
from shopfront.shared.protocols import KeyValueStore

logger = logging.getLogger(__name__)

# Parts as accepted by requests' ``files`` argument: (field, (filename, content[, type]))
MultipartParts = list[tuple[str, tuple[Any, ...]]]


class ApiClient:
    """HTTP client for the storefront API.

    Args:
        store: Key-value store holding the session token
        base_url: API root, e.g. ``http://localhost:5000/api``
        timeout: Per-request timeout in seconds
        verify_ssl: Verify TLS certificates
        session: Optional pre-built session (tests inject a mock)
    """

    def __init__(
        self,
        store: KeyValueStore,
        base_url: str = APIConfig.DEFAULT_BASE_URL,
        timeout: float = APIConfig.DEFAULT_TIMEOUT,
        *,
        verify_ssl: bool = True,
        session: requests.Session | None = None,
    ):
        self.store = store
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": APIConfig.USER_AGENT})

    @classmethod
    def from_settings(cls, settings: APISettings, store: KeyValueStore) -> ApiClient:
        """Build a client from the ``api`` settings domain."""
        return cls(
            store,
            base_url=settings.base_url,
            timeout=settings.timeout,
            verify_ssl=settings.verify_ssl,
        )

    def _auth_headers(self) -> dict[str, str]:
        token = self.store.get_item(StorageKeys.TOKEN)
        if not token:
            return {}
        return {APIConfig.AUTH_HEADER: f"{APIConfig.AUTH_SCHEME} {token}"}

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        files: MultipartParts | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Endpoint path relative to the base URL
            params: Query string parameters
            json: JSON request body
            files: Multipart parts; when given the body is sent as
                ``multipart/form-data`` and ``json`` is ignored

        Returns:
            Decoded response body, or None for an empty body

        Raises:
            ApiError: On timeout, connection failure, non-2xx status or
                a body that is not valid JSON
        """
        url = f"{self.base_url}{path}"
        context = ErrorContext(
            operation="api_request",
            endpoint=path,
            additional_data={"method": method},
        )

        start_time = time.time()
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=None if files else json,
                files=files or None,
                headers=self._auth_headers(),
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.Timeout as e:
            error = ApiError(
                ErrorCode.API_TIMEOUT,
                ApiErrorMessages.TIMEOUT,
                context=context,
                original_error=e,
            )
            log_operation_error(logger=logger, error=error)
            raise error from e
        except requests.ConnectionError as e:
            error = ApiError(
                ErrorCode.NETWORK_ERROR,
                ApiErrorMessages.CONNECTION_FAILED,
                context=context,
                original_error=e,
            )
            log_operation_error(logger=logger, error=error)
            raise error from e
        except requests.RequestException as e:
            error = ApiError(
                ErrorCode.API_REQUEST_FAILED,
                ApiErrorMessages.REQUEST_FAILED.format(reason=e),
                context=context,
                original_error=e,
            )
            log_operation_error(logger=logger, error=error)
            raise error from e

        duration_ms = (time.time() - start_time) * 1000
        log_api_call(
            logger,
            endpoint=path,
            method=method,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        if not HTTPStatusCodes.is_success(response.status_code):
            error = self._error_for_status(response, context)
            log_operation_error(logger=logger, error=error)
            raise error

        return self._decode(response, context)

    def get(self, path: str, params: dict[str, str] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: Any = None,
        files: MultipartParts | None = None,
    ) -> Any:
        return self.request("POST", path, json=json, files=files)

    def put(
        self,
        path: str,
        json: Any = None,
        files: MultipartParts | None = None,
    ) -> Any:
        return self.request("PUT", path, json=json, files=files)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    @staticmethod
    def _decode(response: requests.Response, context: ErrorContext) -> Any:
        if response.status_code == HTTPStatusCodes.NO_CONTENT or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            error = ApiError(
                ErrorCode.API_INVALID_RESPONSE,
                ApiErrorMessages.INVALID_RESPONSE,
                context=context,
                original_error=e,
                status_code=response.status_code,
            )
            log_operation_error(logger=logger, error=error)
            raise error from e

    @staticmethod
    def _server_message(response: requests.Response) -> str | None:
        """Pull the ``message`` field out of an error body, if there is one."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            message = body.get(ResponseFields.MESSAGE)
            if isinstance(message, str) and message:
                return message
        return None

    def _error_for_status(
        self,
        response: requests.Response,
        context: ErrorContext,
    ) -> ApiError:
        status_code = response.status_code

        if status_code == HTTPStatusCodes.UNAUTHORIZED:
            code, message = (
                ErrorCode.API_AUTHENTICATION_FAILED,
                ApiErrorMessages.AUTHENTICATION_FAILED,
            )
        elif status_code == HTTPStatusCodes.FORBIDDEN:
            code, message = ErrorCode.API_FORBIDDEN, ApiErrorMessages.ACCESS_FORBIDDEN
        elif status_code == HTTPStatusCodes.NOT_FOUND:
            code, message = ErrorCode.NOT_FOUND, ApiErrorMessages.NOT_FOUND
        elif HTTPStatusCodes.is_server_error(status_code):
            code, message = (
                ErrorCode.API_SERVER_ERROR,
                ApiErrorMessages.SERVER_ERROR.format(status_code=status_code),
            )
        else:
            code, message = (
                ErrorCode.API_REQUEST_FAILED,
                ApiErrorMessages.CLIENT_ERROR.format(status_code=status_code),
            )

        return ApiError(
            code,
            message,
            context=context,
            status_code=status_code,
            server_message=self._server_message(response),
        )


__all__ = ["ApiClient", "MultipartParts"]
