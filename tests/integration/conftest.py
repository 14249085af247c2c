"""Integration test fixtures.

Runs the full application, lifespan included, against a JSON store in a
temporary directory.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_sharing.factory import create_app
from tests.factories import SettingsFactory, recipe_payload, user_payload


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable
    from pathlib import Path

    from fastapi import FastAPI

    from recipe_sharing.core.config import Settings


pytestmark = pytest.mark.integration


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def test_settings(data_dir: Path) -> Settings:
    """Permissive settings persisting to a temporary JSON store."""
    return SettingsFactory.on_disk(data_dir)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing.

    ASGITransport does not send lifespan events, so startup is driven here.
    """
    async with (
        app.router.lifespan_context(app),
        AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac,
    ):
        yield ac


@pytest.fixture
def create_recipe(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Create a recipe through the API and return it."""

    async def _create(**overrides: Any) -> dict[str, Any]:
        response = await client.post("/recipes", json=recipe_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["recipe"]

    return _create


@pytest.fixture
def create_user(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Create a user through the API and return it."""

    async def _create(**overrides: Any) -> dict[str, Any]:
        response = await client.post("/users", json=user_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()["user"]

    return _create
