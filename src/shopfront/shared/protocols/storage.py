"""Key-value persistence port.

Session state (auth token, user record, cart mirror) is kept behind this
interface instead of a concrete storage backend, so services can run
against an in-memory store in tests and a JSON file in the CLI.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """String-keyed, string-valued store.

    Mirrors the browser local-storage surface: values are opaque strings
    (callers JSON-encode structured data) and a missing key reads as None.

    Example:
        >>> from shopfront.storage import MemoryStore
        >>> store: KeyValueStore = MemoryStore()
        >>> store.set_item("token", "abc")
        >>> store.get_item("token")
        'abc'
    """

    def get_item(self, key: str) -> str | None:
        """Return the value stored under key, or None."""

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    def remove_item(self, key: str) -> None:
        """Delete key. Missing keys are ignored."""

    def clear(self) -> None:
        """Delete every key."""
