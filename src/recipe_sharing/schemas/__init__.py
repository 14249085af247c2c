"""Pydantic schemas for stored entities, write payloads and responses."""

from recipe_sharing.schemas.base import (
    APIRequest,
    APIResponse,
    Entity,
    PartialRequest,
)
from recipe_sharing.schemas.comment import (
    Comment,
    CommentCreate,
    CommentEnvelope,
    CommentUpdate,
)
from recipe_sharing.schemas.common import MessageResponse
from recipe_sharing.schemas.enums import Category, Difficulty
from recipe_sharing.schemas.recipe import (
    Rating,
    RatingRequest,
    Recipe,
    RecipeCreate,
    RecipeEnvelope,
    RecipePage,
    RecipeStats,
    RecipeUpdate,
)
from recipe_sharing.schemas.user import User, UserCreate, UserEnvelope, UserUpdate


__all__ = [
    "APIRequest",
    "APIResponse",
    "Category",
    "Comment",
    "CommentCreate",
    "CommentEnvelope",
    "CommentUpdate",
    "Difficulty",
    "Entity",
    "MessageResponse",
    "PartialRequest",
    "Rating",
    "RatingRequest",
    "Recipe",
    "RecipeCreate",
    "RecipeEnvelope",
    "RecipePage",
    "RecipeStats",
    "RecipeUpdate",
    "User",
    "UserCreate",
    "UserEnvelope",
    "UserUpdate",
]
