"""Authentication session.

Logs in and registers against the storefront API and keeps the resulting
token and user record in the key-value store under ``token`` and ``user``.
The API client reads the same ``token`` key to authorize requests.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import orjson

from shopfront.services.api_client import ApiClient
from shopfront.services.multipart import encode_register_form
from shopfront.shared.constants import (
    Endpoints,
    ResponseFields,
    Roles,
    SessionMessages,
    StorageKeys,
)
from shopfront.shared.errors import (
    AuthenticationRequiredError,
    AuthorizationError,
    ErrorCode,
    ErrorContext,
)
from shopfront.shared.logging import log_operation_success
from shopfront.shared.models import AuthUser
from shopfront.shared.protocols import KeyValueStore

logger = logging.getLogger(__name__)


class AuthSession:
    """Token and user record persisted in a key-value store.

    Args:
        client: API client used for login and register
        store: Store holding ``token`` and ``user``
    """

    def __init__(self, client: ApiClient, store: KeyValueStore):
        self.client = client
        self.store = store

    def login(self, credentials: Mapping[str, Any]) -> dict[str, Any]:
        """Log in with ``{"email": ..., "password": ...}``.

        Returns:
            The server response; the session is stored when it holds a token
        """
        start_time = time.time()
        response = self.client.post(Endpoints.AUTH_LOGIN, json=dict(credentials))
        self._remember(response)
        log_operation_success(
            logger=logger,
            operation="login",
            duration_ms=(time.time() - start_time) * 1000,
            result_info={"authenticated": self.is_authenticated()},
        )
        return response

    def register(self, user_data: Mapping[str, Any]) -> dict[str, Any]:
        """Create an account; text fields and optional ``profileImage`` go
        out as multipart parts."""
        start_time = time.time()
        form = encode_register_form(user_data)
        response = self.client.post(Endpoints.AUTH_REGISTER, files=form.parts)
        self._remember(response)
        log_operation_success(
            logger=logger,
            operation="register",
            duration_ms=(time.time() - start_time) * 1000,
            result_info={"authenticated": self.is_authenticated()},
        )
        return response

    def _remember(self, response: Any) -> None:
        if not isinstance(response, dict):
            return
        token = response.get(ResponseFields.TOKEN)
        if not token:
            return
        self.store.set_item(StorageKeys.TOKEN, str(token))
        self.store.set_item(StorageKeys.USER, orjson.dumps(response).decode())

    def logout(self) -> None:
        self.store.remove_item(StorageKeys.TOKEN)
        self.store.remove_item(StorageKeys.USER)

    @property
    def token(self) -> str | None:
        return self.store.get_item(StorageKeys.TOKEN)

    def get_current_user(self) -> AuthUser | None:
        """Return the stored user record, or None.

        A record that no longer parses is treated as absent.
        """
        raw = self.store.get_item(StorageKeys.USER)
        if not raw:
            return None
        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("Stored user record is not valid JSON; ignoring it")
            return None
        if not isinstance(data, dict):
            return None
        return AuthUser.model_validate(data)

    def is_authenticated(self) -> bool:
        return bool(self.token)

    def is_admin(self) -> bool:
        user = self.get_current_user()
        return user is not None and user.role == Roles.ADMIN

    def require_authenticated(self, operation: str | None = None) -> None:
        """Raise AuthenticationRequiredError when no token is stored."""
        if not self.is_authenticated():
            raise AuthenticationRequiredError(
                ErrorCode.AUTHENTICATION_REQUIRED,
                SessionMessages.LOGIN_REQUIRED,
                context=ErrorContext(operation=operation),
            )

    def require_admin(self, operation: str | None = None) -> AuthUser:
        """Raise unless the stored user is an admin.

        Returns:
            The admin user record
        """
        self.require_authenticated(operation)
        user = self.get_current_user()
        if user is None or not user.is_admin:
            raise AuthorizationError(
                ErrorCode.ADMIN_REQUIRED,
                SessionMessages.ADMIN_REQUIRED,
                context=ErrorContext(operation=operation),
            )
        return user


__all__ = ["AuthSession"]
