"""User repository."""

from __future__ import annotations

from typing import Any

from recipe_sharing.observability.logging import get_logger
from recipe_sharing.repositories.base import Repository
from recipe_sharing.schemas import User

logger = get_logger(__name__)


def _dedupe(ids: list[str]) -> list[str]:
    return list(dict.fromkeys(ids))


class UserRepository(Repository[User]):
    """Users and their favorite recipe ids.

    Favorites behave as an insertion-ordered set: supplying favorites on an
    update adds them to the existing ones.
    """

    collection = "users"
    entity_type = User
    resource_name = "User"
    create_schema = "user"
    update_schema = "user_partial"

    def _build(self, entity_id: str, fields: dict[str, Any]) -> User:
        fields["favorites"] = _dedupe(fields.get("favorites", []))
        return super()._build(entity_id, fields)

    def _merge(self, current: User, changes: dict[str, Any]) -> User:
        if "favorites" in changes:
            changes = {
                **changes,
                "favorites": _dedupe([*current.favorites, *changes["favorites"]]),
            }
        return super()._merge(current, changes)

    def remove_favorite_everywhere(self, recipe_id: str) -> int:
        """Drop ``recipe_id`` from every user's favorites.

        Returns:
            Number of users that changed. Nothing is saved when it is zero.
        """
        changed = [
            user.model_copy(
                update={"favorites": [f for f in user.favorites if f != recipe_id]}
            )
            for user in self.list_all()
            if recipe_id in user.favorites
        ]
        self.replace_many(changed)
        if changed:
            logger.info(
                "Removed recipe from favorites",
                recipe_id=recipe_id,
                users=len(changed),
            )
        return len(changed)
