"""Comment repository."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from recipe_sharing.core.exceptions import NotFoundError
from recipe_sharing.repositories.base import Repository
from recipe_sharing.schemas import Comment


if TYPE_CHECKING:
    from recipe_sharing.repositories.recipes import RecipeRepository
    from recipe_sharing.storage.protocol import CollectionStore


class CommentRepository(Repository[Comment]):
    """Comments on recipes, stamped with their creation time."""

    collection = "comments"
    entity_type = Comment
    resource_name = "Comment"
    create_schema = "comment"
    update_schema = "comment_partial"

    def __init__(
        self,
        store: CollectionStore,
        *,
        recipes: RecipeRepository | None = None,
        require_existing_recipe: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(store, **kwargs)
        self._recipes = recipes
        self.require_existing_recipe = require_existing_recipe

    def list_all(
        self,
        *,
        recipe_id: str | None = None,
        user_id: str | None = None,
    ) -> list[Comment]:
        """Return comments, optionally only those on a recipe or by a user."""
        return [
            comment
            for comment in super().list_all()
            if (recipe_id is None or comment.recipe_id == recipe_id)
            and (user_id is None or comment.user_id == user_id)
        ]

    def _build(self, entity_id: str, fields: dict[str, Any]) -> Comment:
        return super()._build(entity_id, {**fields, "created_at": datetime.now(UTC)})

    def _check_references(self, fields: dict[str, Any]) -> None:
        recipe_id = fields.get("recipe_id")
        if (
            recipe_id is not None
            and self.require_existing_recipe
            and self._recipes is not None
            and not self._recipes.exists(recipe_id)
        ):
            raise NotFoundError("Recipe", recipe_id, code="recipe_not_found")
