"""Schema validation for write payloads.

Payloads are checked against a fixed set of named schemas before any
repository mutation. Each schema is a Pydantic request model; the validator
turns Pydantic's error list into flat field-level errors so callers can
report every problem at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

from pydantic import ValidationError as PydanticValidationError

from recipe_sharing.core.exceptions import ErrorDetail, ValidationError
from recipe_sharing.schemas import (
    CommentCreate,
    CommentUpdate,
    RatingRequest,
    RecipeCreate,
    RecipeUpdate,
    UserCreate,
    UserUpdate,
)


if TYPE_CHECKING:
    from collections.abc import Mapping

    from recipe_sharing.schemas import APIRequest


SCHEMAS: Final[Mapping[str, type[APIRequest]]] = {
    "recipe": RecipeCreate,
    "recipe_partial": RecipeUpdate,
    "user": UserCreate,
    "user_partial": UserUpdate,
    "comment": CommentCreate,
    "comment_partial": CommentUpdate,
    "rating": RatingRequest,
}


class UnknownSchemaError(KeyError):
    """Raised when a schema name is not registered."""


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one payload."""

    valid: bool
    errors: list[ErrorDetail] = field(default_factory=list)
    data: APIRequest | None = None


def _to_field_errors(exc: PydanticValidationError) -> list[ErrorDetail]:
    # Locations use the camelCase wire names
    return [
        ErrorDetail(
            field=".".join(str(part) for part in error["loc"]),
            code=error["type"],
            message=error["msg"],
        )
        for error in exc.errors()
    ]


class SchemaValidator:
    """Validate payloads against named schemas.

    Example:
        result = validator.validate({"name": "So"}, "recipe")
        if not result.valid:
            ...
    """

    def __init__(self, schemas: Mapping[str, type[APIRequest]] | None = None) -> None:
        self._schemas = dict(SCHEMAS if schemas is None else schemas)

    @property
    def schema_names(self) -> list[str]:
        """Registered schema names."""
        return sorted(self._schemas)

    def validate(self, payload: Any, schema_name: str) -> ValidationResult:
        """Check ``payload`` against ``schema_name`` without raising.

        Raises:
            UnknownSchemaError: If the schema name is not registered.
        """
        try:
            model = self._schemas[schema_name]
        except KeyError:
            raise UnknownSchemaError(schema_name) from None

        if not isinstance(payload, dict):
            return ValidationResult(
                valid=False,
                errors=[
                    ErrorDetail(
                        field="",
                        code="model_type",
                        message="Payload must be a JSON object",
                    )
                ],
            )

        try:
            data = model.model_validate(payload)
        except PydanticValidationError as exc:
            return ValidationResult(valid=False, errors=_to_field_errors(exc))

        return ValidationResult(valid=True, data=data)

    def require(self, payload: Any, schema_name: str) -> Any:
        """Return the parsed payload or raise a 400 ``ValidationError``."""
        result = self.validate(payload, schema_name)
        if not result.valid:
            raise ValidationError(result.errors)
        return result.data


default_validator = SchemaValidator()
