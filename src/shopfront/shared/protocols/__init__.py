"""Protocol interfaces for dependency inversion."""

from .storage import KeyValueStore

__all__ = ["KeyValueStore"]
