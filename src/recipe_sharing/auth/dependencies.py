"""FastAPI dependencies for actor resolution."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from recipe_sharing.auth.actor import ActorResolver
from recipe_sharing.schemas import User


def get_actor_resolver(request: Request) -> ActorResolver:
    """Get the actor resolver from app state.

    Raises:
        HTTPException: 503 if the application has not finished starting.
    """
    resolver: ActorResolver | None = getattr(request.app.state, "actor_resolver", None)
    if resolver is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Actor resolution not available",
        )
    return resolver


async def get_current_actor(
    request: Request,
    resolver: Annotated[ActorResolver, Depends(get_actor_resolver)],
) -> User | None:
    """Resolve the acting user for a protected route."""
    return await resolver.resolve(request)


CurrentActor = Annotated[User | None, Depends(get_current_actor)]
