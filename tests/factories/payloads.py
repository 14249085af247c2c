"""Request bodies in their camelCase wire form."""

from __future__ import annotations

from typing import Any


def recipe_payload(**overrides: Any) -> dict[str, Any]:
    """Return a valid POST /recipes body."""
    payload: dict[str, Any] = {
        "name": "Soup",
        "category": "Polievky",
        "ingredients": ["water", "carrot"],
        "steps": ["Boil water", "Add carrot"],
        "prepTime": "25 min",
        "difficulty": "Jednoduchá",
    }
    payload.update(overrides)
    return payload


def user_payload(**overrides: Any) -> dict[str, Any]:
    """Return a valid POST /users body."""
    payload: dict[str, Any] = {"name": "Alice", "email": "alice@example.com"}
    payload.update(overrides)
    return payload


def comment_payload(user_id: str, recipe_id: str, **overrides: Any) -> dict[str, Any]:
    """Return a valid POST /comments body."""
    payload: dict[str, Any] = {
        "userId": user_id,
        "recipeId": recipe_id,
        "text": "Tasty!",
    }
    payload.update(overrides)
    return payload
