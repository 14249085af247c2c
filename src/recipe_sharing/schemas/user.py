"""User schemas."""

from __future__ import annotations

from pydantic import EmailStr

from recipe_sharing.schemas.base import (
    APIRequest,
    APIResponse,
    Entity,
    PartialRequest,
)
from recipe_sharing.schemas.fields import Name, Text


class User(Entity):
    """Stored user."""

    name: str
    email: str
    favorites: list[str] = []


class UserCreate(APIRequest):
    """Payload for POST /users."""

    name: Name
    email: EmailStr
    favorites: list[Text] | None = None


class UserUpdate(PartialRequest):
    """Partial payload for PUT /users/{id}.

    Supplied favorites are added to the existing ones, never replacing them.
    """

    name: Name | None = None
    email: EmailStr | None = None
    favorites: list[Text] | None = None


class UserEnvelope(APIResponse):
    """Message plus the affected user."""

    message: str
    user: User
