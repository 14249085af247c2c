"""Recipe repository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from recipe_sharing.repositories.base import Repository
from recipe_sharing.schemas import Recipe
from recipe_sharing.services.engagement import average_rating


if TYPE_CHECKING:
    from recipe_sharing.repositories.users import UserRepository
    from recipe_sharing.storage.protocol import CollectionStore


class RecipeRepository(Repository[Recipe]):
    """Recipes, optionally cascading deletes into user favorites.

    The cascade is a second, independent save: if it fails the recipe is
    already gone.
    """

    collection = "recipes"
    entity_type = Recipe
    resource_name = "Recipe"
    create_schema = "recipe"
    update_schema = "recipe_partial"

    def __init__(
        self,
        store: CollectionStore,
        *,
        users: UserRepository | None = None,
        cascade_favorites: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(store, **kwargs)
        self._users = users
        self.cascade_favorites = cascade_favorites

    def _merge(self, current: Recipe, changes: dict[str, Any]) -> Recipe:
        merged = super()._merge(current, changes)
        # Rated recipes keep popularity equal to the mean of their ratings
        if merged.ratings:
            return merged.model_copy(
                update={"popularity": average_rating(merged.ratings)}
            )
        return merged

    def delete(self, entity_id: str) -> Recipe:
        removed = super().delete(entity_id)
        if self.cascade_favorites and self._users is not None:
            self._users.remove_favorite_everywhere(entity_id)
        return removed
