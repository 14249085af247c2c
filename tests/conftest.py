"""Shared test fixtures for the recipe sharing service tests.

Provides settings, an in-memory store and repositories wired the same way
the application lifespan wires them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_sharing.core.config import get_settings
from recipe_sharing.observability.logging import clear_context
from recipe_sharing.repositories import (
    CommentRepository,
    RecipeRepository,
    UserRepository,
)
from recipe_sharing.services.engagement import EngagementService
from recipe_sharing.storage import MemoryStore
from tests.factories import SettingsFactory


if TYPE_CHECKING:
    from collections.abc import Generator

    from recipe_sharing.core.config import Settings


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None]:
    """Clear cached settings and logging context around every test."""
    get_settings.cache_clear()
    clear_context()
    yield
    get_settings.cache_clear()
    clear_context()


@pytest.fixture
def settings() -> Settings:
    """Settings with the memory store and the permissive policy."""
    return SettingsFactory.build()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def users(store: MemoryStore) -> UserRepository:
    return UserRepository(store)


@pytest.fixture
def recipes(store: MemoryStore, users: UserRepository) -> RecipeRepository:
    return RecipeRepository(store, users=users)


@pytest.fixture
def comments(store: MemoryStore, recipes: RecipeRepository) -> CommentRepository:
    return CommentRepository(store, recipes=recipes)


@pytest.fixture
def engagement(recipes: RecipeRepository, users: UserRepository) -> EngagementService:
    return EngagementService(recipes, users)
