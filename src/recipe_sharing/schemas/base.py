"""Base schema configuration for all Pydantic models.

This module provides centralized base classes with consistent configuration.

Usage:
    - APIRequest: For incoming write payloads (create bodies)
    - PartialRequest: For shallow-merge update payloads
    - Entity: For stored entities (recipes, users, comments)
    - APIResponse: For response envelopes
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
        serialize_by_alias=True,
    )


class APIRequest(_BaseSchema):
    """Base class for incoming write payloads.

    Unknown fields reject the whole payload, only the camelCase wire names are
    accepted and explicit ``null`` is never a valid value.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=False,
        validate_default=False,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            msg = "may not be null"
            raise ValueError(msg)
        return value


class PartialRequest(APIRequest):
    """Base class for update payloads.

    Every field is optional and none is nullable, so a field can be replaced
    but never cleared.
    """


class Entity(_BaseSchema):
    """Base class for stored entities.

    Unknown keys in stored documents are dropped on load.
    """

    model_config = ConfigDict(extra="ignore")

    id: str

    def to_document(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON document written to storage."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class APIResponse(_BaseSchema):
    """Base class for outgoing response envelopes."""

    model_config = ConfigDict(extra="forbid")
