"""Recipe endpoints.

Provides:
- CRUD on /recipes
- GET /recipes/filter for filtered, paginated search
- GET /recipes/stats for collection statistics
- POST /recipes/rate/{recipeId} for ratings
- /recipes/favorites/{userId}[/{recipeId}] for user favorites

Static paths are declared before /recipes/{recipeId} so they are not
captured as ids.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Query, status

from recipe_sharing.api.dependencies import (
    get_app_settings,
    get_engagement_service,
    get_recipe_repository,
)
from recipe_sharing.auth import CurrentActor
from recipe_sharing.core.config import Settings  # noqa: TC001
from recipe_sharing.observability.logging import get_logger
from recipe_sharing.repositories import RecipeRepository  # noqa: TC001
from recipe_sharing.schemas import (
    MessageResponse,
    Recipe,
    RecipeEnvelope,
    RecipePage,
    RecipeStats,
)
from recipe_sharing.services.engagement import EngagementService  # noqa: TC001
from recipe_sharing.services.query import RecipeQuery, recipe_stats, search_recipes


logger = get_logger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])

RecipeId = Annotated[str, Path(alias="recipeId", description="Recipe identifier")]
UserId = Annotated[str, Path(alias="userId", description="User identifier")]
Payload = Annotated[Any, Body(description="Recipe fields (camelCase)")]
Recipes = Annotated[RecipeRepository, Depends(get_recipe_repository)]
Engagement = Annotated[EngagementService, Depends(get_engagement_service)]

_ERRORS = {
    400: {"description": "Validation error"},
    401: {"description": "Missing or unknown actor (strict policy)"},
    404: {"description": "Recipe not found"},
}


@router.post(
    "",
    response_model=RecipeEnvelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses={400: _ERRORS[400], 401: _ERRORS[401]},
)
async def create_recipe(
    payload: Payload,
    recipes: Recipes,
    actor: CurrentActor,
) -> RecipeEnvelope:
    """Validate and store a new recipe with a generated id."""
    recipe = recipes.create(payload)
    logger.debug("Recipe created by actor", actor_id=actor.id if actor else None)
    return RecipeEnvelope(message="Recipe successfully created", recipe=recipe)


@router.get(
    "",
    response_model=list[Recipe],
    response_model_exclude_none=True,
    summary="List all recipes",
)
async def list_recipes(recipes: Recipes) -> list[Recipe]:
    """Return every recipe, unfiltered."""
    return recipes.list_all()


@router.get(
    "/filter",
    response_model=RecipePage,
    response_model_exclude_none=True,
    summary="Filter and paginate recipes",
    responses={400: _ERRORS[400]},
)
async def filter_recipes(
    recipes: Recipes,
    settings: Annotated[Settings, Depends(get_app_settings)],
    category: Annotated[str | None, Query(description="Exact category")] = None,
    ingredients: Annotated[
        str | None,
        Query(description="Comma-separated; every term must match an ingredient"),
    ] = None,
    popularity: Annotated[
        float | None, Query(description="Minimum popularity (inclusive)")
    ] = None,
    difficulty: Annotated[
        str | None, Query(description="Exact difficulty")
    ] = None,
    search: Annotated[
        str | None, Query(description="Case-insensitive name substring")
    ] = None,
    max_prep_time: Annotated[
        int | None,
        Query(alias="maxPrepTime", description="Maximum prep time in minutes"),
    ] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> RecipePage:
    """Filter recipes by every supplied criterion, then return one page.

    Unknown category or difficulty values match nothing.
    """
    if limit is None:
        limit = settings.pagination.default_limit

    query = RecipeQuery(
        category=category,
        ingredients=ingredients,
        popularity=popularity,
        difficulty=difficulty,
        search=search,
        max_prep_time=max_prep_time,
        page=page,
        limit=limit,
    )
    return search_recipes(recipes.list_all(), query)


@router.get(
    "/stats",
    response_model=RecipeStats,
    summary="Recipe statistics",
)
async def get_recipe_stats(recipes: Recipes) -> RecipeStats:
    """Return the total count, count per category and average popularity."""
    return recipe_stats(recipes.list_all())


@router.post(
    "/rate/{recipeId}",
    response_model=RecipeEnvelope,
    response_model_exclude_none=True,
    summary="Rate a recipe",
    responses=_ERRORS,
)
async def rate_recipe(
    recipe_id: RecipeId,
    payload: Annotated[Any, Body(description="{rating, userId?}")],
    engagement: Engagement,
    actor: CurrentActor,
) -> RecipeEnvelope:
    """Add a 0-5 rating and recompute the recipe's popularity."""
    recipe = engagement.rate(recipe_id, payload, actor.id if actor else None)
    return RecipeEnvelope(message="Rating added", recipe=recipe)


@router.put(
    "/favorites/{userId}/{recipeId}",
    response_model=MessageResponse,
    summary="Add a recipe to a user's favorites",
    responses={404: {"description": "User or recipe not found"}},
)
async def add_favorite(
    user_id: UserId,
    recipe_id: RecipeId,
    engagement: Engagement,
) -> MessageResponse:
    """Add the recipe to the user's favorites; repeating it changes nothing."""
    engagement.add_favorite(user_id, recipe_id)
    return MessageResponse(message="Recipe added to favorites")


@router.delete(
    "/favorites/{userId}/{recipeId}",
    response_model=MessageResponse,
    summary="Remove a recipe from a user's favorites",
    responses={404: {"description": "User not found"}},
)
async def remove_favorite(
    user_id: UserId,
    recipe_id: RecipeId,
    engagement: Engagement,
) -> MessageResponse:
    engagement.remove_favorite(user_id, recipe_id)
    return MessageResponse(message="Recipe removed from favorites")


@router.get(
    "/favorites/{userId}",
    response_model=list[Recipe],
    response_model_exclude_none=True,
    summary="List a user's favorite recipes",
    responses={404: {"description": "User not found"}},
)
async def list_favorites(user_id: UserId, engagement: Engagement) -> list[Recipe]:
    return engagement.list_favorites(user_id)


@router.get(
    "/{recipeId}",
    response_model=Recipe,
    response_model_exclude_none=True,
    summary="Get a recipe",
    responses={404: _ERRORS[404]},
)
async def get_recipe(recipe_id: RecipeId, recipes: Recipes) -> Recipe:
    return recipes.get_by_id(recipe_id)


@router.put(
    "/{recipeId}",
    response_model=RecipeEnvelope,
    response_model_exclude_none=True,
    summary="Update a recipe",
    description=(
        "Shallow merge: supplied fields overwrite, absent fields are kept. "
        "Fields cannot be cleared."
    ),
    responses=_ERRORS,
)
async def update_recipe(
    recipe_id: RecipeId,
    payload: Payload,
    recipes: Recipes,
    actor: CurrentActor,  # noqa: ARG001
) -> RecipeEnvelope:
    recipe = recipes.update(recipe_id, payload)
    return RecipeEnvelope(message="Recipe successfully updated", recipe=recipe)


@router.delete(
    "/{recipeId}",
    response_model=MessageResponse,
    summary="Delete a recipe",
    responses={401: _ERRORS[401], 404: _ERRORS[404]},
)
async def delete_recipe(
    recipe_id: RecipeId,
    recipes: Recipes,
    actor: CurrentActor,  # noqa: ARG001
) -> MessageResponse:
    """Delete a recipe (and, when configured, drop it from all favorites)."""
    recipes.delete(recipe_id)
    return MessageResponse(message="Recipe successfully deleted")
