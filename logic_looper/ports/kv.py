"""
Key-value store port.

The activity map, per-day game state and the sync credential are all stored
as JSON strings under fixed namespaced keys. Backends: in-memory, JSON file,
SQLite.
"""

from __future__ import annotations

from typing import Protocol


class KeyValueStorePort(Protocol):
    """String key to string value store."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def delete(self, key: str) -> bool:
        """
        Remove key.

        Returns:
            True if deleted, False if key didn't exist
        """
        ...


class StorageError(Exception):
    """Base class for key-value storage errors."""


class StorageUnavailableError(StorageError):
    """Raised when the backend cannot be read or written."""

    def __init__(self, backend: str, reason: str) -> None:
        self.backend = backend
        self.reason = reason
        super().__init__(f"{backend} storage unavailable: {reason}")
