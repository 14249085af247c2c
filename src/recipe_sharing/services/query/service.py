"""Recipe filtering, pagination and statistics.

Filters are optional and combined with AND, applied in a fixed order:
category, ingredients, minimum popularity, difficulty, name search and
maximum preparation time. The surviving recipes are counted and then sliced
into the requested page.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from recipe_sharing.schemas import RecipePage, RecipeStats


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from recipe_sharing.schemas import Recipe

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"^[+-]?\d+")


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` half-up to ``places`` decimals."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def parse_prep_minutes(prep_time: str) -> int | None:
    """Parse the integer at the start of the first token of ``prep_time``.

    ``"25 min"`` gives 25, ``"90min"`` gives 90, ``"about 20"`` gives None.
    """
    tokens = prep_time.split()
    if not tokens:
        return None
    match = _LEADING_INT.match(tokens[0])
    return int(match.group()) if match else None


def parse_ingredient_terms(ingredients: str) -> list[str]:
    """Split a comma-separated query into trimmed, lower-cased terms."""
    return [term.strip().lower() for term in ingredients.split(",") if term.strip()]


@dataclass(frozen=True)
class RecipeQuery:
    """Filter and pagination parameters for the recipe search."""

    category: str | None = None
    ingredients: str | None = None
    popularity: float | None = None
    difficulty: str | None = None
    search: str | None = None
    max_prep_time: int | None = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1 or self.limit < 1:
            msg = "page and limit must be positive integers"
            raise ValueError(msg)


def _has_ingredients(recipe: Recipe, terms: list[str]) -> bool:
    owned = [ingredient.lower() for ingredient in recipe.ingredients]
    return all(any(term in ingredient for ingredient in owned) for term in terms)


def _within_prep_time(recipe: Recipe, max_minutes: int) -> bool:
    minutes = parse_prep_minutes(recipe.prep_time)
    return minutes is not None and minutes <= max_minutes


def filter_recipes(recipes: Iterable[Recipe], query: RecipeQuery) -> list[Recipe]:
    """Apply every filter set on ``query``; unset filters are skipped."""
    results = list(recipes)

    if query.category:
        results = [r for r in results if r.category == query.category]

    if query.ingredients:
        terms = parse_ingredient_terms(query.ingredients)
        if terms:
            results = [r for r in results if _has_ingredients(r, terms)]

    if query.popularity is not None:
        results = [r for r in results if (r.popularity or 0.0) >= query.popularity]

    if query.difficulty:
        results = [r for r in results if r.difficulty == query.difficulty]

    if query.search:
        keyword = query.search.lower()
        results = [r for r in results if keyword in r.name.lower()]

    if query.max_prep_time is not None:
        results = [r for r in results if _within_prep_time(r, query.max_prep_time)]

    return results


def paginate(items: Sequence[Recipe], page: int, limit: int) -> list[Recipe]:
    """Return the ``page``-th slice of ``limit`` items; past the end is empty."""
    start = (page - 1) * limit
    return list(items[start : start + limit])


def search_recipes(recipes: Iterable[Recipe], query: RecipeQuery) -> RecipePage:
    """Filter then paginate, reporting the pre-pagination total."""
    matches = filter_recipes(recipes, query)
    return RecipePage(
        total=len(matches),
        page=query.page,
        limit=query.limit,
        recipes=paginate(matches, query.page, query.limit),
    )


def recipe_stats(recipes: Sequence[Recipe]) -> RecipeStats:
    """Count recipes overall and per category, and average their popularity.

    Recipes without a popularity count as 0. An empty collection averages 0.
    """
    by_category: dict[str, int] = {}
    for recipe in recipes:
        by_category[recipe.category] = by_category.get(recipe.category, 0) + 1

    average = 0.0
    if recipes:
        average = round_half_up(
            sum(r.popularity or 0.0 for r in recipes) / len(recipes)
        )

    return RecipeStats(
        total_recipes=len(recipes),
        by_category=by_category,
        average_popularity=average,
    )
