"""Comment schemas."""

from __future__ import annotations

from datetime import datetime

from recipe_sharing.schemas.base import (
    APIRequest,
    APIResponse,
    Entity,
    PartialRequest,
)
from recipe_sharing.schemas.fields import NonEmptyText


class Comment(Entity):
    """Stored comment."""

    user_id: str
    recipe_id: str
    text: str
    created_at: datetime


class CommentCreate(APIRequest):
    """Payload for POST /comments."""

    user_id: NonEmptyText
    recipe_id: NonEmptyText
    text: NonEmptyText


class CommentUpdate(PartialRequest):
    """Partial payload for PUT /comments/{id}."""

    user_id: NonEmptyText | None = None
    recipe_id: NonEmptyText | None = None
    text: NonEmptyText | None = None


class CommentEnvelope(APIResponse):
    """Message plus the affected comment."""

    message: str
    comment: Comment
