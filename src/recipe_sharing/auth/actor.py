"""Actor resolution for protected routes.

The acting user is identified by an id sent in a request header (default
``X-User-ID``) or, failing that, a string ``userId`` field in a JSON object
body. The id is looked up in the user repository.

What happens when the id is missing or unknown depends on the policy:

- ``strict``: the request is rejected with 401
- ``permissive``: the request continues with no actor
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_sharing.auth.exceptions import AuthConfigurationError
from recipe_sharing.core.config import AuthPolicy
from recipe_sharing.core.exceptions import UnauthorizedError
from recipe_sharing.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request

    from recipe_sharing.core.config import Settings
    from recipe_sharing.repositories import UserRepository
    from recipe_sharing.schemas import User

logger = get_logger(__name__)


def require_policy(settings: Settings) -> AuthPolicy:
    """Return the configured policy, refusing to guess when it is unset.

    Raises:
        AuthConfigurationError: If ``auth.policy`` is not set.
    """
    if settings.auth.policy is None:
        msg = (
            "auth.policy is not set. Choose 'strict' (reject unknown actors "
            "with 401) or 'permissive' (treat them as anonymous), e.g. "
            "AUTH__POLICY=strict"
        )
        raise AuthConfigurationError(msg)
    return AuthPolicy(settings.auth.policy)


class ActorResolver:
    """Resolve the acting user of a request according to a policy."""

    def __init__(
        self,
        users: UserRepository,
        policy: AuthPolicy,
        *,
        header_name: str = "X-User-ID",
        body_field: str = "userId",
    ) -> None:
        self._users = users
        self.policy = AuthPolicy(policy)
        self.header_name = header_name
        self.body_field = body_field

    async def resolve(self, request: Request) -> User | None:
        """Return the acting user, or None for an anonymous request.

        Raises:
            UnauthorizedError: Under the strict policy, when the id is
                missing or does not match a user.
        """
        actor_id = request.headers.get(self.header_name) or await self._body_actor_id(
            request
        )
        if not actor_id:
            return self._reject("User is not signed in")

        user = self._users.find(actor_id)
        if user is None:
            logger.debug("Unknown actor id", actor_id=actor_id)
            return self._reject("Unknown user")

        return user

    def _reject(self, message: str) -> None:
        if self.policy == AuthPolicy.STRICT:
            raise UnauthorizedError(message)
        return None

    async def _body_actor_id(self, request: Request) -> str | None:
        if "json" not in request.headers.get("content-type", ""):
            return None
        try:
            body = await request.json()
        except ValueError:
            # Malformed bodies are reported by body validation
            return None
        if isinstance(body, dict):
            value = body.get(self.body_field)
            if isinstance(value, str) and value:
                return value
        return None
