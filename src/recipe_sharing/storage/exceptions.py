"""Storage exceptions.

Raised by collection stores and left to propagate: the generic exception
handler turns them into a 500 ``server_error`` response.
"""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for collection store failures."""

    def __init__(self, message: str, collection: str | None = None) -> None:
        self.collection = collection
        super().__init__(message)


class CorruptSnapshotError(StorageError):
    """Raised when a stored snapshot cannot be decoded."""


class ConfigurationError(StorageError):
    """Raised when the store is misconfigured."""
