"""Collection store factory.

Creates the store selected by ``storage.backend``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from recipe_sharing.core.config import StorageBackend, get_settings
from recipe_sharing.observability.logging import get_logger
from recipe_sharing.storage.exceptions import ConfigurationError
from recipe_sharing.storage.journal import JournalStore
from recipe_sharing.storage.json_file import JsonFileStore
from recipe_sharing.storage.memory import MemoryStore


if TYPE_CHECKING:
    from recipe_sharing.core.config import Settings
    from recipe_sharing.storage.protocol import CollectionStore

logger = get_logger(__name__)


def create_store(settings: Settings | None = None) -> CollectionStore:
    """Create the configured collection store.

    Args:
        settings: Optional settings override. Uses get_settings() if not provided.

    Returns:
        A store implementing ``CollectionStore``.

    Raises:
        ConfigurationError: If the backend is not supported.
    """
    if settings is None:
        settings = get_settings()

    backend = StorageBackend(settings.storage.backend)
    data_dir = Path(settings.storage.data_dir)

    store: CollectionStore
    if backend == StorageBackend.MEMORY:
        store = MemoryStore()
    elif backend == StorageBackend.JSON:
        store = JsonFileStore(data_dir)
    elif backend == StorageBackend.JOURNAL:
        store = JournalStore(
            data_dir,
            compaction_threshold=settings.storage.compaction_threshold,
        )
    else:
        msg = f"Unsupported storage backend: {backend}"
        raise ConfigurationError(msg)

    logger.info(
        "Collection store created",
        backend=store.backend_name,
        data_dir=str(data_dir) if backend != StorageBackend.MEMORY else None,
    )
    return store
