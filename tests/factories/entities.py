"""Factories for stored entities."""

from __future__ import annotations

import uuid

from polyfactory import Use
from polyfactory.factories.pydantic_factory import ModelFactory

from recipe_sharing.schemas import Category, Difficulty, Recipe, User


class RecipeFactory(ModelFactory[Recipe]):
    """Factory for stored recipes with a parseable preparation time."""

    __model__ = Recipe

    id = Use(lambda: str(uuid.uuid4()))
    name = Use(lambda: f"Recipe {uuid.uuid4().hex[:8]}")
    category = Category.SOUPS
    difficulty = Difficulty.EASY
    ingredients = Use(lambda: ["water", "salt"])
    steps = Use(lambda: ["Boil", "Serve"])
    prep_time = "20 min"
    popularity = None
    image = None
    ratings = None


class UserFactory(ModelFactory[User]):
    """Factory for stored users without favorites."""

    __model__ = User

    id = Use(lambda: str(uuid.uuid4()))
    name = Use(lambda: f"user-{uuid.uuid4().hex[:6]}")
    email = Use(lambda: f"{uuid.uuid4().hex[:8]}@example.com")
    favorites = Use(list)
