"""Local cart mirror.

Keeps a list of cart lines and a badge count, persisted as JSON under the
``cartItems`` key. It mirrors what the user added in this client; the
server cart (see :mod:`shopfront.services.cart_service`) stays the source
of truth for checkout.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import orjson

from shopfront.shared.constants import StorageKeys
from shopfront.shared.errors import ErrorCode, ErrorContext, StorageError
from shopfront.shared.logging import log_operation_error
from shopfront.shared.models import CartItem
from shopfront.shared.protocols import KeyValueStore

logger = logging.getLogger(__name__)


def _identity(item: Mapping[str, Any]) -> Any:
    return item.get("_id") or item.get("productId")


class CartSession:
    """Cart mirror backed by a key-value store.

    Mutations are synchronous and last-writer-wins; two processes sharing
    one store can overwrite each other.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.items: list[dict[str, Any]] = self._load()
        self.count = len(self.items)

    def _load(self) -> list[dict[str, Any]]:
        raw = self.store.get_item(StorageKeys.CART_ITEMS)
        if not raw:
            return []
        try:
            items = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            error = StorageError(
                ErrorCode.STORAGE_CORRUPTED,
                "Persisted cart is not valid JSON; starting with an empty cart",
                context=ErrorContext(operation="load_cart"),
                original_error=e,
            )
            log_operation_error(logger=logger, error=error)
            return []
        if not isinstance(items, list):
            logger.warning("Persisted cart is not a list; starting with an empty cart")
            return []
        return [item for item in items if isinstance(item, dict)]

    def _persist(self) -> None:
        self.store.set_item(StorageKeys.CART_ITEMS, orjson.dumps(self.items).decode())

    def add_to_cart(self, item: CartItem | Mapping[str, Any]) -> None:
        """Append a line and persist."""
        if isinstance(item, CartItem):
            line = item.to_wire()
        else:
            line = dict(item)
        self.items = [*self.items, line]
        self.count = len(self.items)
        self._persist()

    def remove_from_cart(self, item_id: str) -> None:
        """Drop every line whose ``_id`` (or, lacking one, ``productId``)
        equals ``item_id`` and persist."""
        self.items = [item for item in self.items if _identity(item) != item_id]
        self.count = len(self.items)
        self._persist()

    def clear_cart(self) -> None:
        self.items = []
        self.count = 0
        self.store.remove_item(StorageKeys.CART_ITEMS)

    def update_cart_count(self, count: int) -> None:
        """Override the badge count without touching the item list."""
        self.count = count


__all__ = ["CartSession"]
