"""Collection stores: whole-collection load/save over pluggable backends.

Backends:
- memory: process-local, nothing survives a restart
- json: one pretty-printed JSON snapshot per collection
- journal: append-only log in front of JSON snapshots, compacted periodically
"""

from recipe_sharing.storage.exceptions import (
    ConfigurationError,
    CorruptSnapshotError,
    StorageError,
)
from recipe_sharing.storage.factory import create_store
from recipe_sharing.storage.journal import JournalStore
from recipe_sharing.storage.json_file import JsonFileStore
from recipe_sharing.storage.memory import MemoryStore
from recipe_sharing.storage.protocol import CollectionStore


__all__ = [
    "CollectionStore",
    "ConfigurationError",
    "CorruptSnapshotError",
    "JournalStore",
    "JsonFileStore",
    "MemoryStore",
    "StorageError",
    "create_store",
]
