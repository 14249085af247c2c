"""Unit tests for the user and comment repositories and the delete cascade."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from freezegun import freeze_time

from recipe_sharing.core.exceptions import NotFoundError, ValidationError
from recipe_sharing.repositories import (
    CommentRepository,
    RecipeRepository,
    UserRepository,
)
from recipe_sharing.storage import MemoryStore
from tests.factories import comment_payload, recipe_payload, user_payload


pytestmark = pytest.mark.unit


class TestUserRepository:
    """Tests for UserRepository."""

    def test_create_defaults_favorites(self, users: UserRepository) -> None:
        """Should start users with no favorites."""
        user = users.create(user_payload())

        assert user.favorites == []
        assert user.email == "alice@example.com"

    def test_create_dedupes_favorites(self, users: UserRepository) -> None:
        """Should store favorites as a set, keeping first occurrence order."""
        user = users.create(user_payload(favorites=["r2", "r1", "r2"]))

        assert user.favorites == ["r2", "r1"]

    def test_update_unions_favorites(self, users: UserRepository) -> None:
        """Should add supplied favorites to the existing ones."""
        user = users.create(user_payload(favorites=["r1"]))

        updated = users.update(user.id, {"favorites": ["r2", "r1"]})

        assert updated.favorites == ["r1", "r2"]

    def test_update_without_favorites_keeps_them(self, users: UserRepository) -> None:
        """Should leave favorites alone when the update omits them."""
        user = users.create(user_payload(favorites=["r1"]))

        updated = users.update(user.id, {"name": "Alicia"})

        assert updated.name == "Alicia"
        assert updated.favorites == ["r1"]

    def test_remove_favorite_everywhere(self, users: UserRepository) -> None:
        """Should drop a recipe id from every user that has it."""
        alice = users.create(user_payload(favorites=["r1", "r2"]))
        bob = users.create(user_payload(name="Bobby", favorites=["r2"]))
        carol = users.create(user_payload(name="Carol", favorites=["r1"]))

        changed = users.remove_favorite_everywhere("r2")

        assert changed == 2
        assert users.get_by_id(alice.id).favorites == ["r1"]
        assert users.get_by_id(bob.id).favorites == []
        assert users.get_by_id(carol.id).favorites == ["r1"]

    def test_remove_favorite_everywhere_without_matches(
        self, users: UserRepository
    ) -> None:
        """Should report zero when no user has the recipe."""
        users.create(user_payload())

        assert users.remove_favorite_everywhere("r9") == 0


class TestRecipeDeleteCascade:
    """Tests for dropping deleted recipes from favorites."""

    def test_cascade_removes_favorites(
        self, recipes: RecipeRepository, users: UserRepository
    ) -> None:
        """Should remove the deleted recipe from user favorites."""
        soup = recipes.create(recipe_payload())
        stew = recipes.create(recipe_payload(name="Stew"))
        user = users.create(user_payload(favorites=[soup.id, stew.id]))

        recipes.delete(soup.id)

        assert users.get_by_id(user.id).favorites == [stew.id]

    def test_cascade_can_be_disabled(self, store: MemoryStore) -> None:
        """Should leave favorites alone when the cascade is off."""
        users = UserRepository(store)
        recipes = RecipeRepository(store, users=users, cascade_favorites=False)
        soup = recipes.create(recipe_payload())
        user = users.create(user_payload(favorites=[soup.id]))

        recipes.delete(soup.id)

        assert users.get_by_id(user.id).favorites == [soup.id]


class TestCommentRepository:
    """Tests for CommentRepository."""

    @freeze_time("2026-03-01 12:00:00")
    def test_create_stamps_creation_time(
        self, comments: CommentRepository, recipes: RecipeRepository
    ) -> None:
        """Should set createdAt on the server."""
        recipe = recipes.create(recipe_payload())

        comment = comments.create(comment_payload("u1", recipe.id))

        assert comment.created_at == datetime(2026, 3, 1, 12, tzinfo=UTC)
        assert comment.to_document()["createdAt"].startswith("2026-03-01T12:00:00")

    def test_rejects_client_timestamp(
        self, comments: CommentRepository, recipes: RecipeRepository
    ) -> None:
        """Should not accept createdAt from the client."""
        recipe = recipes.create(recipe_payload())

        with pytest.raises(ValidationError):
            comments.create(
                comment_payload("u1", recipe.id, createdAt="2020-01-01T00:00:00Z")
            )

    def test_requires_existing_recipe(self, comments: CommentRepository) -> None:
        """Should refuse comments on unknown recipes."""
        with pytest.raises(NotFoundError) as exc_info:
            comments.create(comment_payload("u1", "missing"))

        assert exc_info.value.code == "recipe_not_found"
        assert comments.list_all() == []

    def test_update_checks_recipe_reference(
        self, comments: CommentRepository, recipes: RecipeRepository
    ) -> None:
        """Should refuse moving a comment to an unknown recipe."""
        recipe = recipes.create(recipe_payload())
        comment = comments.create(comment_payload("u1", recipe.id))

        with pytest.raises(NotFoundError):
            comments.update(comment.id, {"recipeId": "missing"})

    def test_reference_check_can_be_disabled(self, store: MemoryStore) -> None:
        """Should accept any recipe id when the check is off."""
        comments = CommentRepository(
            store,
            recipes=RecipeRepository(store),
            require_existing_recipe=False,
        )

        comment = comments.create(comment_payload("u1", "anything"))

        assert comment.recipe_id == "anything"

    def test_update_keeps_creation_time(
        self, comments: CommentRepository, recipes: RecipeRepository
    ) -> None:
        """Should only change the supplied text."""
        recipe = recipes.create(recipe_payload())
        comment = comments.create(comment_payload("u1", recipe.id))

        updated = comments.update(comment.id, {"text": "Even better"})

        assert updated.text == "Even better"
        assert updated.created_at == comment.created_at

    def test_list_filters(
        self, comments: CommentRepository, recipes: RecipeRepository
    ) -> None:
        """Should filter by recipe, by user, or both."""
        soup = recipes.create(recipe_payload())
        stew = recipes.create(recipe_payload(name="Stew"))
        comments.create(comment_payload("u1", soup.id))
        comments.create(comment_payload("u2", soup.id))
        comments.create(comment_payload("u1", stew.id))

        assert len(comments.list_all()) == 3
        assert len(comments.list_all(recipe_id=soup.id)) == 2
        assert len(comments.list_all(user_id="u1")) == 2
        assert len(comments.list_all(recipe_id=soup.id, user_id="u1")) == 1
