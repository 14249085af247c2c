"""FastAPI dependencies for repository and service access.

Repositories and services are created once during application startup and
stored in ``app.state``; these dependencies hand them to route handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request, status


if TYPE_CHECKING:
    from recipe_sharing.core.config import Settings
    from recipe_sharing.repositories import (
        CommentRepository,
        RecipeRepository,
        UserRepository,
    )
    from recipe_sharing.services.engagement import EngagementService


def _from_state(request: Request, name: str, label: str) -> Any:
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} not available",
        )
    return value


async def get_recipe_repository(request: Request) -> RecipeRepository:
    """Get the recipe repository from app state.

    Raises:
        HTTPException: 503 if the repository is not initialized.
    """
    return _from_state(request, "recipes", "Recipe repository")


async def get_user_repository(request: Request) -> UserRepository:
    """Get the user repository from app state."""
    return _from_state(request, "users", "User repository")


async def get_comment_repository(request: Request) -> CommentRepository:
    """Get the comment repository from app state."""
    return _from_state(request, "comments", "Comment repository")


async def get_engagement_service(request: Request) -> EngagementService:
    """Get the ratings/favorites service from app state."""
    return _from_state(request, "engagement", "Engagement service")


async def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return _from_state(request, "settings", "Settings")
