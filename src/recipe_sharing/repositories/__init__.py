"""Entity repositories owning the recipe, user and comment collections."""

from recipe_sharing.repositories.base import Repository
from recipe_sharing.repositories.comments import CommentRepository
from recipe_sharing.repositories.recipes import RecipeRepository
from recipe_sharing.repositories.users import UserRepository


__all__ = [
    "CommentRepository",
    "RecipeRepository",
    "Repository",
    "UserRepository",
]
