"""Generic entity repository.

A repository owns one in-memory collection loaded from a ``CollectionStore``
at construction. Every mutation validates first, changes the in-memory list,
then saves the whole collection back. The in-memory list is only swapped
after the save succeeds, so a failed write leaves both sides unchanged.

There is no concurrency token: two writers to the same id simply overwrite
each other (last write wins).
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from recipe_sharing.core.config import UpdateMode
from recipe_sharing.core.exceptions import NotFoundError
from recipe_sharing.observability.logging import get_logger
from recipe_sharing.schemas.base import Entity
from recipe_sharing.validation import SchemaValidator, default_validator


if TYPE_CHECKING:
    from collections.abc import Callable

    from recipe_sharing.schemas.base import APIRequest
    from recipe_sharing.storage.protocol import CollectionStore

logger = get_logger(__name__)

EntityT = TypeVar("EntityT", bound=Entity)


class Repository(Generic[EntityT]):
    """CRUD over one entity collection with whole-collection persistence.

    Subclasses set the class attributes and may override the ``_build``,
    ``_merge`` and ``_check_references`` hooks.
    """

    collection: ClassVar[str]
    entity_type: ClassVar[type[Entity]]
    resource_name: ClassVar[str]
    create_schema: ClassVar[str]
    update_schema: ClassVar[str]

    def __init__(
        self,
        store: CollectionStore,
        *,
        validator: SchemaValidator | None = None,
        update_mode: UpdateMode = UpdateMode.PARTIAL,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._validator = validator or default_validator
        self._update_mode = UpdateMode(update_mode)
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._items: list[EntityT] = [
            self.entity_type.model_validate(doc)  # type: ignore[misc]
            for doc in store.load(self.collection)
        ]
        logger.debug(
            "Collection loaded",
            collection=self.collection,
            items=len(self._items),
        )

    # =========================================================================
    # Reads
    # =========================================================================

    def list_all(self) -> list[EntityT]:
        """Return every entity in insertion order."""
        return list(self._items)

    def find(self, entity_id: str) -> EntityT | None:
        """Return the entity with ``entity_id`` or None."""
        return next((item for item in self._items if item.id == entity_id), None)

    def exists(self, entity_id: str) -> bool:
        return self.find(entity_id) is not None

    def get_by_id(self, entity_id: str) -> EntityT:
        """Return the entity with ``entity_id``.

        Raises:
            NotFoundError: If no entity has that id.
        """
        entity = self.find(entity_id)
        if entity is None:
            raise NotFoundError(self.resource_name, entity_id)
        return entity

    def __len__(self) -> int:
        return len(self._items)

    # =========================================================================
    # Writes
    # =========================================================================

    def create(self, payload: Any) -> EntityT:
        """Validate ``payload``, assign a fresh id, append and persist.

        Raises:
            ValidationError: If the payload does not match the create schema.
        """
        data = self._validator.require(payload, self.create_schema)
        fields = data.model_dump(exclude_none=True, by_alias=False)
        self._check_references(fields)

        entity = self._build(self._new_id(), fields)
        self._commit(lambda items: items.append(entity))

        logger.info(f"{self.resource_name} created", entity_id=entity.id)
        return entity

    def update(self, entity_id: str, payload: Any) -> EntityT:
        """Shallow-merge ``payload`` into the entity and persist.

        Supplied fields overwrite, absent fields are kept. The payload is
        validated before the lookup, so an invalid body on an unknown id
        reports the validation error.

        Raises:
            ValidationError: If the payload does not match the update schema.
            NotFoundError: If no entity has that id.
        """
        schema = (
            self.update_schema
            if self._update_mode == UpdateMode.PARTIAL
            else self.create_schema
        )
        data: APIRequest = self._validator.require(payload, schema)
        changes = data.model_dump(exclude_unset=True, by_alias=False)

        index = self._index_of(entity_id)
        self._check_references(changes)
        merged = self._merge(self._items[index], changes)
        self._commit(lambda items: items.__setitem__(index, merged))

        logger.info(
            f"{self.resource_name} updated",
            entity_id=entity_id,
            fields=sorted(changes),
        )
        return merged

    def delete(self, entity_id: str) -> EntityT:
        """Remove the entity and persist.

        Raises:
            NotFoundError: If no entity has that id.
        """
        index = self._index_of(entity_id)
        removed = self._items[index]
        self._commit(lambda items: items.pop(index))

        logger.info(f"{self.resource_name} deleted", entity_id=entity_id)
        return removed

    def replace(self, entity: EntityT) -> None:
        """Swap in a modified copy of an existing entity and persist.

        Used by services that derive server-maintained fields.

        Raises:
            NotFoundError: If no entity has that id.
        """
        index = self._index_of(entity.id)
        self._commit(lambda items: items.__setitem__(index, entity))

    def replace_many(self, entities: list[EntityT]) -> None:
        """Swap in several modified entities with a single save."""
        if not entities:
            return
        updates = {entity.id: entity for entity in entities}
        for entity_id in updates:
            self._index_of(entity_id)

        def _apply(items: list[EntityT]) -> None:
            for i, item in enumerate(items):
                if item.id in updates:
                    items[i] = updates[item.id]

        self._commit(_apply)

    # =========================================================================
    # Hooks
    # =========================================================================

    def _build(self, entity_id: str, fields: dict[str, Any]) -> EntityT:
        return self.entity_type.model_validate({**fields, "id": entity_id})  # type: ignore[return-value]

    def _merge(self, current: EntityT, changes: dict[str, Any]) -> EntityT:
        return self.entity_type.model_validate(  # type: ignore[return-value]
            {**current.model_dump(by_alias=False), **changes}
        )

    def _check_references(self, fields: dict[str, Any]) -> None:
        """Verify cross-collection references before a write."""

    # =========================================================================
    # Internals
    # =========================================================================

    def _index_of(self, entity_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                return index
        raise NotFoundError(self.resource_name, entity_id)

    def _new_id(self) -> str:
        existing = {item.id for item in self._items}
        while True:
            candidate = self._id_factory()
            if candidate not in existing:
                return candidate

    def _commit(self, mutate: Callable[[list[EntityT]], Any]) -> None:
        working = list(self._items)
        mutate(working)
        self._store.save(self.collection, [item.to_document() for item in working])
        self._items = working
