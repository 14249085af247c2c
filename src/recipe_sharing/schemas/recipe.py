"""Recipe schemas: stored entity, write payloads and query results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from recipe_sharing.schemas.base import (
    APIRequest,
    APIResponse,
    Entity,
    PartialRequest,
)
from recipe_sharing.schemas.enums import Category, Difficulty
from recipe_sharing.schemas.fields import (
    Name,
    NonEmptyText,
    Popularity,
    Score,
    Text,
    TextList,
)


class Rating(BaseModel):
    """A single rating submitted for a recipe."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str | None = None
    rating: float


class Recipe(Entity):
    """Stored recipe."""

    name: str
    category: Category
    ingredients: list[str]
    steps: list[str]
    prep_time: str
    difficulty: Difficulty
    popularity: float | None = None
    image: str | None = None
    ratings: list[Rating] | None = None


class RecipeCreate(APIRequest):
    """Payload for POST /recipes (and PUT in full update mode)."""

    name: Name
    category: Category
    ingredients: TextList
    steps: TextList
    prep_time: Text
    difficulty: Difficulty
    popularity: Popularity | None = None
    image: Text | None = None


class RecipeUpdate(PartialRequest):
    """Partial payload for PUT /recipes/{id}."""

    name: Name | None = None
    category: Category | None = None
    ingredients: TextList | None = None
    steps: TextList | None = None
    prep_time: Text | None = None
    difficulty: Difficulty | None = None
    popularity: Popularity | None = None
    image: Text | None = None


class RatingRequest(APIRequest):
    """Payload for POST /recipes/rate/{recipeId}.

    The range is enforced by the rating service so that out-of-range values
    report ``invalid_rating`` rather than a schema error.
    """

    rating: Score
    user_id: NonEmptyText | None = None


class RecipeEnvelope(APIResponse):
    """Message plus the affected recipe."""

    message: str
    recipe: Recipe


class RecipePage(APIResponse):
    """One page of filtered recipes."""

    total: int = Field(..., description="Matches before pagination")
    page: int
    limit: int
    recipes: list[Recipe]


class RecipeStats(APIResponse):
    """Aggregate statistics over the recipe collection."""

    total_recipes: int
    by_category: dict[str, int]
    average_popularity: float
