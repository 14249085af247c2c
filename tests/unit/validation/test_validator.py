"""Unit tests for the schema validator.

Tests cover:
- Accepting complete payloads
- Missing, extra, null and mistyped fields
- Partial schemas
- Unknown schema names
"""

from __future__ import annotations

import pytest

from recipe_sharing.core.exceptions import ValidationError
from recipe_sharing.schemas import RecipeCreate
from recipe_sharing.validation import (
    SchemaValidator,
    UnknownSchemaError,
    default_validator,
)
from tests.factories import recipe_payload, user_payload


pytestmark = pytest.mark.unit


def _fields(result) -> set[str]:
    return {error.field for error in result.errors}


class TestValidate:
    """Tests for SchemaValidator.validate."""

    def test_accepts_complete_recipe(self) -> None:
        """Should return a parsed model for a valid payload."""
        result = default_validator.validate(recipe_payload(), "recipe")

        assert result.valid
        assert result.errors == []
        assert isinstance(result.data, RecipeCreate)
        assert result.data.prep_time == "25 min"

    def test_reports_missing_required_field(self) -> None:
        """Should name the missing field using its wire name."""
        payload = recipe_payload()
        del payload["prepTime"]

        result = default_validator.validate(payload, "recipe")

        assert not result.valid
        assert "prepTime" in _fields(result)
        assert result.data is None

    def test_rejects_extra_field(self) -> None:
        """Should reject fields that are not part of the schema."""
        result = default_validator.validate(recipe_payload(chef="Gordon"), "recipe")

        assert not result.valid
        assert "chef" in _fields(result)

    def test_rejects_short_name(self) -> None:
        """Should enforce the three character minimum on names."""
        result = default_validator.validate(recipe_payload(name="So"), "recipe")

        assert not result.valid
        assert _fields(result) == {"name"}

    def test_rejects_unknown_category(self) -> None:
        """Should only accept the fixed category values."""
        result = default_validator.validate(recipe_payload(category="Pizza"), "recipe")

        assert not result.valid
        assert "category" in _fields(result)

    def test_rejects_empty_ingredient_list(self) -> None:
        """Should require at least one ingredient."""
        result = default_validator.validate(recipe_payload(ingredients=[]), "recipe")

        assert not result.valid
        assert "ingredients" in _fields(result)

    def test_rejects_numbers_for_strings(self) -> None:
        """Should not coerce numbers into text fields."""
        result = default_validator.validate(recipe_payload(prepTime=25), "recipe")

        assert not result.valid
        assert "prepTime" in _fields(result)

    def test_rejects_popularity_out_of_range(self) -> None:
        """Should keep popularity within 0 to 5."""
        result = default_validator.validate(recipe_payload(popularity=7), "recipe")

        assert not result.valid
        assert "popularity" in _fields(result)

    def test_rejects_snake_case_keys(self) -> None:
        """Should only accept camelCase wire names."""
        payload = recipe_payload()
        payload["prep_time"] = payload.pop("prepTime")

        result = default_validator.validate(payload, "recipe")

        assert not result.valid
        assert {"prepTime", "prep_time"} <= _fields(result)

    def test_reports_every_error_at_once(self) -> None:
        """Should collect all field errors rather than stopping at the first."""
        result = default_validator.validate(
            recipe_payload(name="So", difficulty="Easy"), "recipe"
        )

        assert {"name", "difficulty"} <= _fields(result)

    def test_rejects_non_object_payload(self) -> None:
        """Should reject arrays and scalars before field validation."""
        result = default_validator.validate(["not", "an", "object"], "recipe")

        assert not result.valid
        assert result.errors[0].code == "model_type"

    def test_validates_email(self) -> None:
        """Should require a well-formed user email."""
        result = default_validator.validate(user_payload(email="nope"), "user")

        assert not result.valid
        assert "email" in _fields(result)


class TestPartialSchemas:
    """Tests for the *_partial update schemas."""

    def test_accepts_empty_update(self) -> None:
        """Should accept an update that changes nothing."""
        result = default_validator.validate({}, "recipe_partial")

        assert result.valid

    def test_accepts_subset_of_fields(self) -> None:
        """Should only mark supplied fields as set."""
        result = default_validator.validate({"name": "Stew"}, "recipe_partial")

        assert result.valid
        assert result.data.model_fields_set == {"name"}

    def test_rejects_null(self) -> None:
        """Should not allow a field to be cleared with null."""
        result = default_validator.validate({"image": None}, "recipe_partial")

        assert not result.valid
        assert "image" in _fields(result)

    def test_still_checks_constraints(self) -> None:
        """Should apply the same constraints as the full schema."""
        result = default_validator.validate({"name": "So"}, "recipe_partial")

        assert not result.valid


class TestRequire:
    """Tests for SchemaValidator.require."""

    def test_returns_model(self) -> None:
        """Should return the parsed payload when valid."""
        data = default_validator.require({"rating": 4}, "rating")

        assert data.rating == 4

    def test_raises_validation_error(self) -> None:
        """Should raise a 400 ValidationError with field details."""
        with pytest.raises(ValidationError) as exc_info:
            default_validator.require({"rating": "high"}, "rating")

        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "validation_error"
        assert exc_info.value.errors[0].field == "rating"


class TestSchemaRegistry:
    """Tests for schema lookup."""

    def test_unknown_schema_name(self) -> None:
        """Should raise UnknownSchemaError for unregistered names."""
        with pytest.raises(UnknownSchemaError):
            default_validator.validate({}, "ingredient")

    def test_lists_registered_schemas(self) -> None:
        """Should expose the registered schema names."""
        assert "recipe" in default_validator.schema_names
        assert "comment_partial" in default_validator.schema_names

    def test_custom_registry(self) -> None:
        """Should accept a custom schema mapping."""
        validator = SchemaValidator({"only_recipe": RecipeCreate})

        assert validator.schema_names == ["only_recipe"]
        assert validator.validate(recipe_payload(), "only_recipe").valid
