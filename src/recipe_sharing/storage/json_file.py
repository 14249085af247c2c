"""JSON snapshot collection store.

Each collection is one pretty-printed JSON array in ``<data_dir>/<name>.json``.
Every save rewrites the whole document. The new content is written to a
temporary file in the same directory and moved over the old one, so a crash
mid-write leaves the previous snapshot in place.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson

from recipe_sharing.observability.logging import get_logger
from recipe_sharing.storage.exceptions import CorruptSnapshotError, StorageError
from recipe_sharing.storage.protocol import check_collection_name


if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


def write_atomic(path: Path, content: bytes) -> None:
    """Replace ``path`` with ``content`` via a temp file and ``os.replace``."""
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        Path(tmp_name).replace(path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            Path(tmp_name).unlink()
        raise


class JsonFileStore:
    """Collection store writing one JSON document per collection."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def backend_name(self) -> str:
        return "json"

    def path_for(self, collection: str) -> Path:
        """Return the snapshot path for ``collection``."""
        return self.data_dir / f"{check_collection_name(collection)}.json"

    def load(self, collection: str) -> list[dict[str, Any]]:
        path = self.path_for(collection)
        if not path.exists():
            return []

        try:
            data = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as e:
            msg = f"Snapshot {path} is not valid JSON: {e}"
            raise CorruptSnapshotError(msg, collection=collection) from e

        if not isinstance(data, list):
            msg = f"Snapshot {path} must hold a JSON array"
            raise CorruptSnapshotError(msg, collection=collection)
        return data

    def save(self, collection: str, items: Sequence[dict[str, Any]]) -> None:
        path = self.path_for(collection)
        try:
            content = orjson.dumps(list(items), option=orjson.OPT_INDENT_2)
            write_atomic(path, content)
        except (OSError, TypeError) as e:
            msg = f"Failed to write snapshot {path}: {e}"
            raise StorageError(msg, collection=collection) from e

        logger.debug("Snapshot written", collection=collection, items=len(items))

    def check(self) -> bool:
        return self.data_dir.is_dir() and os.access(self.data_dir, os.W_OK)
