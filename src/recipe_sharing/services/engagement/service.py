"""Ratings and favorites.

Ratings fold into a recipe's popularity: once a recipe has ratings, its
popularity is always the mean of all of them, rounded half-up to two
decimals. Favorites are a per-user, insertion-ordered set of recipe ids.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from recipe_sharing.core.exceptions import InvalidRatingError, NotFoundError
from recipe_sharing.observability.logging import get_logger
from recipe_sharing.schemas import Rating, Recipe, User
from recipe_sharing.services.query import round_half_up
from recipe_sharing.validation import SchemaValidator, default_validator


if TYPE_CHECKING:
    from recipe_sharing.repositories import RecipeRepository, UserRepository

logger = get_logger(__name__)

MIN_RATING: Final[float] = 0.0
MAX_RATING: Final[float] = 5.0


def average_rating(ratings: list[Rating]) -> float:
    """Mean of ``ratings`` rounded half-up to two decimals."""
    return round_half_up(sum(r.rating for r in ratings) / len(ratings))


class EngagementService:
    """Rate recipes and manage user favorites."""

    def __init__(
        self,
        recipes: RecipeRepository,
        users: UserRepository,
        validator: SchemaValidator | None = None,
    ) -> None:
        self._recipes = recipes
        self._users = users
        self._validator = validator or default_validator

    def rate(
        self,
        recipe_id: str,
        payload: Any,
        actor_id: str | None = None,
    ) -> Recipe:
        """Add a rating to a recipe and recompute its popularity.

        The rater is the payload's ``userId`` when given, else ``actor_id``.

        Raises:
            ValidationError: If the payload is malformed.
            InvalidRatingError: If the rating is outside [0, 5].
            NotFoundError: If the recipe does not exist.
        """
        data = self._validator.require(payload, "rating")
        if not MIN_RATING <= data.rating <= MAX_RATING:
            raise InvalidRatingError(data.rating, MIN_RATING, MAX_RATING)

        recipe = self._get_recipe(recipe_id)
        ratings = [
            *(recipe.ratings or []),
            Rating(user_id=data.user_id or actor_id, rating=data.rating),
        ]
        updated = recipe.model_copy(
            update={"ratings": ratings, "popularity": average_rating(ratings)}
        )
        self._recipes.replace(updated)

        logger.info(
            "Recipe rated",
            recipe_id=recipe_id,
            rating=data.rating,
            popularity=updated.popularity,
            ratings=len(ratings),
        )
        return updated

    def add_favorite(self, user_id: str, recipe_id: str) -> bool:
        """Add ``recipe_id`` to the user's favorites.

        Returns:
            True if the favorites changed; the user is only saved then.

        Raises:
            NotFoundError: If the user or the recipe does not exist.
        """
        user = self._get_user(user_id)
        self._get_recipe(recipe_id)

        if recipe_id in user.favorites:
            return False

        self._users.replace(
            user.model_copy(update={"favorites": [*user.favorites, recipe_id]})
        )
        logger.info("Favorite added", user_id=user_id, recipe_id=recipe_id)
        return True

    def remove_favorite(self, user_id: str, recipe_id: str) -> bool:
        """Remove ``recipe_id`` from the user's favorites.

        The recipe does not have to exist, so ids left behind by a deleted
        recipe can still be cleaned up.

        Returns:
            True if the favorites changed.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = self._get_user(user_id)
        if recipe_id not in user.favorites:
            return False

        self._users.replace(
            user.model_copy(
                update={"favorites": [f for f in user.favorites if f != recipe_id]}
            )
        )
        logger.info("Favorite removed", user_id=user_id, recipe_id=recipe_id)
        return True

    def list_favorites(self, user_id: str) -> list[Recipe]:
        """Return the user's favorite recipes in collection order.

        Raises:
            NotFoundError: If the user does not exist.
        """
        favorites = set(self._get_user(user_id).favorites)
        return [r for r in self._recipes.list_all() if r.id in favorites]

    def _get_user(self, user_id: str) -> User:
        user = self._users.find(user_id)
        if user is None:
            raise NotFoundError("User", user_id, code="user_not_found")
        return user

    def _get_recipe(self, recipe_id: str) -> Recipe:
        recipe = self._recipes.find(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id, code="recipe_not_found")
        return recipe
