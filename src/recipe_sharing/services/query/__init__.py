"""Recipe search: conjunctive filters, pagination and statistics."""

from recipe_sharing.services.query.service import (
    RecipeQuery,
    filter_recipes,
    paginate,
    parse_ingredient_terms,
    parse_prep_minutes,
    recipe_stats,
    round_half_up,
    search_recipes,
)


__all__ = [
    "RecipeQuery",
    "filter_recipes",
    "paginate",
    "parse_ingredient_terms",
    "parse_prep_minutes",
    "recipe_stats",
    "round_half_up",
    "search_recipes",
]
