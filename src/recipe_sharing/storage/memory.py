"""In-memory collection store.

Keeps deep copies so callers can never mutate stored state by reference.
Data lives only as long as the process.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from recipe_sharing.storage.protocol import check_collection_name


if TYPE_CHECKING:
    from collections.abc import Sequence


class MemoryStore:
    """Collection store backed by a process-local dict."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = copy.deepcopy(
            initial or {}
        )

    @property
    def backend_name(self) -> str:
        return "memory"

    def load(self, collection: str) -> list[dict[str, Any]]:
        check_collection_name(collection)
        return copy.deepcopy(self._collections.get(collection, []))

    def save(self, collection: str, items: Sequence[dict[str, Any]]) -> None:
        check_collection_name(collection)
        self._collections[collection] = copy.deepcopy(list(items))

    def check(self) -> bool:
        return True
