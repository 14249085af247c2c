"""Unit tests for actor resolution."""

from __future__ import annotations

from typing import Any

import orjson
import pytest
from starlette.requests import Request

from recipe_sharing.auth import ActorResolver, AuthConfigurationError, require_policy
from recipe_sharing.core.config import AuthPolicy
from recipe_sharing.core.config.settings import AuthSettings
from recipe_sharing.core.exceptions import UnauthorizedError
from recipe_sharing.repositories import UserRepository
from tests.factories import SettingsFactory, user_payload


pytestmark = pytest.mark.unit


def _request(
    headers: dict[str, str] | None = None,
    body: Any = None,
    content_type: str = "application/json",
) -> Request:
    raw_body = b"" if body is None else orjson.dumps(body)
    raw_headers = [
        (key.lower().encode(), value.encode()) for key, value in (headers or {}).items()
    ]
    if body is not None:
        raw_headers.append((b"content-type", content_type.encode()))

    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": raw_body, "more_body": False}

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/recipes",
        "headers": raw_headers,
        "query_string": b"",
    }
    return Request(scope, receive)


class TestRequirePolicy:
    """Tests for require_policy."""

    def test_unset_policy_fails(self) -> None:
        """Should refuse to pick a policy on the operator's behalf."""
        settings = SettingsFactory.build(auth=AuthSettings(policy=None))

        with pytest.raises(AuthConfigurationError, match="auth.policy"):
            require_policy(settings)

    @pytest.mark.parametrize("policy", list(AuthPolicy))
    def test_returns_configured_policy(self, policy: AuthPolicy) -> None:
        settings = SettingsFactory.build(auth=AuthSettings(policy=policy))

        assert require_policy(settings) is policy


class TestStrictPolicy:
    """Tests for ActorResolver under the strict policy."""

    @pytest.fixture
    def resolver(self, users: UserRepository) -> ActorResolver:
        return ActorResolver(users, AuthPolicy.STRICT)

    async def test_resolves_header(
        self, resolver: ActorResolver, users: UserRepository
    ) -> None:
        """Should look up the user named by X-User-ID."""
        user = users.create(user_payload())

        actor = await resolver.resolve(_request({"X-User-ID": user.id}))

        assert actor == user

    async def test_falls_back_to_body(
        self, resolver: ActorResolver, users: UserRepository
    ) -> None:
        """Should read userId from a JSON object body without a header."""
        user = users.create(user_payload())

        actor = await resolver.resolve(_request(body={"userId": user.id}))

        assert actor == user

    async def test_header_wins_over_body(
        self, resolver: ActorResolver, users: UserRepository
    ) -> None:
        header_user = users.create(user_payload())
        body_user = users.create(user_payload(name="Bobby"))

        actor = await resolver.resolve(
            _request({"X-User-ID": header_user.id}, body={"userId": body_user.id})
        )

        assert actor == header_user

    async def test_missing_actor(self, resolver: ActorResolver) -> None:
        """Should reject requests that name no user."""
        with pytest.raises(UnauthorizedError) as exc_info:
            await resolver.resolve(_request())

        assert exc_info.value.status_code == 401
        assert exc_info.value.code == "unauthorized"

    async def test_unknown_actor(self, resolver: ActorResolver) -> None:
        """Should reject ids that do not match a user."""
        with pytest.raises(UnauthorizedError, match="Unknown user"):
            await resolver.resolve(_request({"X-User-ID": "ghost"}))

    @pytest.mark.parametrize(
        "body",
        [["userId", "u1"], {"userId": 42}, {"userId": ""}, {"name": "Soup"}],
    )
    async def test_ignores_unusable_bodies(
        self, resolver: ActorResolver, body: Any
    ) -> None:
        """Should only accept a non-empty string userId in a JSON object."""
        with pytest.raises(UnauthorizedError):
            await resolver.resolve(_request(body=body))

    async def test_ignores_non_json_bodies(
        self, resolver: ActorResolver, users: UserRepository
    ) -> None:
        user = users.create(user_payload())

        with pytest.raises(UnauthorizedError):
            await resolver.resolve(
                _request(body={"userId": user.id}, content_type="text/plain")
            )

    async def test_custom_header_name(self, users: UserRepository) -> None:
        """Should honour a configured header name."""
        user = users.create(user_payload())
        resolver = ActorResolver(users, AuthPolicy.STRICT, header_name="X-Actor")

        assert await resolver.resolve(_request({"X-Actor": user.id})) == user


class TestPermissivePolicy:
    """Tests for ActorResolver under the permissive policy."""

    @pytest.fixture
    def resolver(self, users: UserRepository) -> ActorResolver:
        return ActorResolver(users, AuthPolicy.PERMISSIVE)

    async def test_missing_actor_is_anonymous(self, resolver: ActorResolver) -> None:
        """Should let the request continue with no actor."""
        assert await resolver.resolve(_request()) is None

    async def test_unknown_actor_is_anonymous(self, resolver: ActorResolver) -> None:
        assert await resolver.resolve(_request({"X-User-ID": "ghost"})) is None

    async def test_known_actor_still_resolved(
        self, resolver: ActorResolver, users: UserRepository
    ) -> None:
        user = users.create(user_payload())

        assert await resolver.resolve(_request({"X-User-ID": user.id})) == user
