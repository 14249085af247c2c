"""Response schemas shared across resources."""

from __future__ import annotations

from recipe_sharing.schemas.base import APIResponse


class MessageResponse(APIResponse):
    """Bare confirmation message."""

    message: str
