"""Append-only journal collection store with periodic compaction.

A collection is a JSON snapshot (see ``JsonFileStore``) plus a write-ahead
log ``<name>.log`` of JSON lines::

    {"op": "upsert", "id": "...", "doc": {...}}
    {"op": "delete", "id": "..."}

``save`` diffs the new collection against the last known state and appends
only the changed entities, so a write costs O(changes) on disk. ``load``
replays the log over the snapshot. Once a log holds ``compaction_threshold``
records it is folded into a fresh snapshot and truncated.

Replay rules keep collection order: an upsert of a known id replaces it in
place, an unknown id is appended, a delete removes. Replaying a log over a
snapshot that already contains its effects is harmless, which covers a crash
between writing the snapshot and truncating the log.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson

from recipe_sharing.observability.logging import get_logger
from recipe_sharing.storage.exceptions import StorageError
from recipe_sharing.storage.json_file import JsonFileStore
from recipe_sharing.storage.protocol import check_collection_name


if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)

OP_UPSERT = "upsert"
OP_DELETE = "delete"


def _index_by_id(
    items: Sequence[dict[str, Any]], collection: str
) -> dict[str, dict[str, Any]]:
    indexed: dict[str, dict[str, Any]] = {}
    for item in items:
        item_id = item.get("id")
        if not isinstance(item_id, str):
            msg = f"Every item in '{collection}' needs a string id"
            raise StorageError(msg, collection=collection)
        indexed[item_id] = item
    return indexed


class JournalStore:
    """Collection store with an append log in front of JSON snapshots."""

    def __init__(self, data_dir: Path | str, compaction_threshold: int = 200) -> None:
        if compaction_threshold < 1:
            msg = "compaction_threshold must be at least 1"
            raise ValueError(msg)
        self._snapshots = JsonFileStore(data_dir)
        self.compaction_threshold = compaction_threshold
        # Last persisted state and log length per collection
        self._state: dict[str, dict[str, dict[str, Any]]] = {}
        self._log_records: dict[str, int] = {}

    @property
    def backend_name(self) -> str:
        return "journal"

    @property
    def data_dir(self) -> Path:
        return self._snapshots.data_dir

    def log_path_for(self, collection: str) -> Path:
        """Return the journal path for ``collection``."""
        return self.data_dir / f"{check_collection_name(collection)}.log"

    def pending_records(self, collection: str) -> int:
        """Number of log records not yet folded into the snapshot."""
        if collection not in self._state:
            self.load(collection)
        return self._log_records[collection]

    def load(self, collection: str) -> list[dict[str, Any]]:
        state = _index_by_id(self._snapshots.load(collection), collection)
        replayed = 0

        log_path = self.log_path_for(collection)
        if log_path.exists():
            with log_path.open("rb") as f:
                for line_no, line in enumerate(f, start=1):
                    if not line.strip():
                        continue
                    try:
                        record = orjson.loads(line)
                    except orjson.JSONDecodeError:
                        # A torn final line from an interrupted append
                        logger.warning(
                            "Skipping unreadable journal record",
                            collection=collection,
                            line=line_no,
                        )
                        continue
                    self._apply(state, record)
                    replayed += 1

        self._state[collection] = state
        self._log_records[collection] = replayed
        return copy.deepcopy(list(state.values()))

    def save(self, collection: str, items: Sequence[dict[str, Any]]) -> None:
        if collection not in self._state:
            self.load(collection)

        previous = self._state[collection]
        current = copy.deepcopy(_index_by_id(items, collection))

        surviving_before = [item_id for item_id in previous if item_id in current]
        surviving_after = [item_id for item_id in current if item_id in previous]
        if surviving_before != surviving_after:
            # Reordering cannot be expressed as upserts/deletes
            self._rewrite(collection, current)
            return

        records: list[dict[str, Any]] = [
            {"op": OP_DELETE, "id": item_id}
            for item_id in previous
            if item_id not in current
        ]
        records.extend(
            {"op": OP_UPSERT, "id": item_id, "doc": doc}
            for item_id, doc in current.items()
            if previous.get(item_id) != doc
        )
        if not records:
            return

        self._append(collection, records)
        self._state[collection] = current
        self._log_records[collection] += len(records)

        if self._log_records[collection] >= self.compaction_threshold:
            self.compact(collection)

    def compact(self, collection: str) -> None:
        """Fold the journal into a new snapshot and truncate it."""
        if collection not in self._state:
            self.load(collection)
        self._rewrite(collection, self._state[collection])

    def check(self) -> bool:
        return self._snapshots.check()

    def _rewrite(self, collection: str, state: dict[str, dict[str, Any]]) -> None:
        """Write ``state`` as the snapshot, empty the log, then adopt it."""
        items = list(state.values())
        self._snapshots.save(collection, items)
        try:
            self.log_path_for(collection).write_bytes(b"")
        except OSError as e:
            msg = f"Failed to truncate journal for '{collection}': {e}"
            raise StorageError(msg, collection=collection) from e

        logger.info(
            "Journal compacted",
            collection=collection,
            folded_records=self._log_records.get(collection, 0),
            items=len(items),
        )
        self._state[collection] = state
        self._log_records[collection] = 0

    def _append(self, collection: str, records: list[dict[str, Any]]) -> None:
        payload = b"".join(orjson.dumps(record) + b"\n" for record in records)
        try:
            with self.log_path_for(collection).open("ab") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
        except (OSError, TypeError) as e:
            msg = f"Failed to append to journal for '{collection}': {e}"
            raise StorageError(msg, collection=collection) from e

    @staticmethod
    def _apply(state: dict[str, dict[str, Any]], record: dict[str, Any]) -> None:
        op = record.get("op")
        item_id = record.get("id")
        if op == OP_UPSERT:
            state[item_id] = record["doc"]
        elif op == OP_DELETE:
            state.pop(item_id, None)
        else:
            logger.warning("Ignoring unknown journal operation", op=op)
