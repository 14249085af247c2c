"""Actor resolution: who is making a request, under a strict or permissive policy."""

from recipe_sharing.auth.actor import ActorResolver, require_policy
from recipe_sharing.auth.dependencies import (
    CurrentActor,
    get_actor_resolver,
    get_current_actor,
)
from recipe_sharing.auth.exceptions import AuthConfigurationError


__all__ = [
    "ActorResolver",
    "AuthConfigurationError",
    "CurrentActor",
    "get_actor_resolver",
    "get_current_actor",
    "require_policy",
]
