"""Collection store protocol definition.

A collection store persists whole entity collections. Each collection is a
list of JSON-compatible dicts that carry an ``id`` key.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from recipe_sharing.storage.exceptions import StorageError


if TYPE_CHECKING:
    from collections.abc import Sequence

_COLLECTION_NAME = re.compile(r"^[a-z][a-z0-9_]*$")


def check_collection_name(collection: str) -> str:
    """Reject collection names that are not simple lowercase identifiers."""
    if not _COLLECTION_NAME.match(collection):
        msg = f"Invalid collection name: {collection!r}"
        raise StorageError(msg, collection=collection)
    return collection


@runtime_checkable
class CollectionStore(Protocol):
    """Protocol for collection stores.

    Example implementation:
        class MyStore:
            @property
            def backend_name(self) -> str:
                return "mine"

            def load(self, collection: str) -> list[dict[str, Any]]:
                ...

            def save(self, collection: str, items: Sequence[dict[str, Any]]) -> None:
                ...

            def check(self) -> bool:
                ...
    """

    @property
    def backend_name(self) -> str:
        """Short backend name for logging and readiness output."""
        ...

    def load(self, collection: str) -> list[dict[str, Any]]:
        """Return the stored collection, or an empty list if none exists yet."""
        ...

    def save(self, collection: str, items: Sequence[dict[str, Any]]) -> None:
        """Persist ``items`` as the complete new state of ``collection``."""
        ...

    def check(self) -> bool:
        """Return True when the store can currently be written to."""
        ...
