"""Payload validation against named write schemas."""

from recipe_sharing.validation.validator import (
    SCHEMAS,
    SchemaValidator,
    UnknownSchemaError,
    ValidationResult,
    default_validator,
)


__all__ = [
    "SCHEMAS",
    "SchemaValidator",
    "UnknownSchemaError",
    "ValidationResult",
    "default_validator",
]
