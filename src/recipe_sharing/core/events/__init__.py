"""Application lifecycle events."""

from recipe_sharing.core.events.lifespan import lifespan


__all__ = ["lifespan"]
