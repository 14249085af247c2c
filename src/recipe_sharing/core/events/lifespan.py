"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: configure logging, open the collection store, load
  the repositories and wire the services onto ``app.state``
- Application shutdown: release the state so a restarted app reloads from disk
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_sharing.auth import ActorResolver, require_policy
from recipe_sharing.core.config import get_settings
from recipe_sharing.observability.logging import get_logger, setup_logging
from recipe_sharing.repositories import (
    CommentRepository,
    RecipeRepository,
    UserRepository,
)
from recipe_sharing.services.engagement import EngagementService
from recipe_sharing.storage import create_store


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_sharing.core.config import Settings

logger = get_logger(__name__)

_STATE_KEYS = (
    "store",
    "users",
    "recipes",
    "comments",
    "engagement",
    "actor_resolver",
)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.

    Raises:
        AuthConfigurationError: If no actor policy is configured.
        StorageError: If a stored collection cannot be read.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    try:
        policy = require_policy(settings)
    except Exception:
        logger.exception("Refusing to start without an actor policy")
        raise

    store = create_store(settings)
    update_mode = settings.api.update_mode

    users = UserRepository(store, update_mode=update_mode)
    recipes = RecipeRepository(
        store,
        users=users,
        cascade_favorites=settings.recipes.cascade_favorites,
        update_mode=update_mode,
    )
    comments = CommentRepository(
        store,
        recipes=recipes,
        require_existing_recipe=settings.comments.require_existing_recipe,
        update_mode=update_mode,
    )

    app.state.store = store
    app.state.users = users
    app.state.recipes = recipes
    app.state.comments = comments
    app.state.engagement = EngagementService(recipes, users)
    app.state.actor_resolver = ActorResolver(
        users,
        policy,
        header_name=settings.auth.user_id_header,
        body_field=settings.auth.body_field,
    )

    logger.info(
        "Application startup complete",
        storage=store.backend_name,
        auth_policy=policy.value,
        recipes=len(recipes),
        users=len(users),
        comments=len(comments),
    )


async def _shutdown(app: FastAPI) -> None:
    """Drop the services from ``app.state``.

    Every write is persisted when it happens, so there is nothing to flush.
    """
    logger.info("Shutting down application")
    for key in _STATE_KEYS:
        if hasattr(app.state, key):
            delattr(app.state, key)
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Uses the settings the app was created with, falling back to
    ``get_settings()``.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
