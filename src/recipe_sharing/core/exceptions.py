"""Custom exceptions and exception handlers.

This module provides structured exception handling with:
- Application error classes carrying an HTTP status and a stable error code
- FastAPI exception handlers producing the ``{code, message}`` envelope
- Field-level details for validation failures
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

if TYPE_CHECKING:
    from fastapi import Request


class ErrorDetail(BaseModel):
    """A single field-level error."""

    field: str
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    code: str
    message: str
    errors: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppError(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class
    for consistent error handling.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        errors: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.errors = errors
        super().__init__(message)


class ValidationError(AppError):
    """Payload failed schema validation."""

    def __init__(
        self,
        errors: list[ErrorDetail],
        message: str = "Request validation failed",
    ) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="validation_error",
            message=message,
            errors=errors,
        )


class BadRequestError(AppError):
    """Bad request exception."""

    def __init__(self, message: str, code: str = "bad_request") -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code=code,
            message=message,
        )


class InvalidRatingError(BadRequestError):
    """Rating outside the accepted range."""

    def __init__(self, rating: float, low: float = 0, high: float = 5) -> None:
        self.rating = rating
        super().__init__(
            message=f"Rating must be between {low:g} and {high:g}, got {rating:g}",
            code="invalid_rating",
        )


class NotFoundError(AppError):
    """Resource not found exception."""

    def __init__(
        self,
        resource: str,
        identifier: Any,
        code: str = "not_found",
    ) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code=code,
            message=f"{resource} with identifier '{identifier}' not found",
        )


class UnauthorizedError(AppError):
    """Missing or unknown actor on a protected route."""

    def __init__(self, message: str = "User is not signed in") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="unauthorized",
            message=message,
        )


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def _error_content(
    request: Request,
    code: str,
    message: str,
    errors: list[ErrorDetail] | None = None,
) -> dict[str, Any]:
    return ErrorResponse(
        code=code,
        message=message,
        errors=errors,
        request_id=_get_request_id(request),
    ).model_dump(by_alias=True, exclude_none=True)


def _field_path(loc: tuple[Any, ...]) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI adds
    parts = [str(part) for part in loc]
    if parts and parts[0] in {"body", "query", "path", "header"}:
        parts = parts[1:]
    return ".".join(parts)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppError)
    async def app_error_handler(
        request: Request,
        exc: AppError,
    ) -> ORJSONResponse:
        """Handle application errors."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=_error_content(request, exc.code, exc.message, exc.errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle Starlette HTTP exceptions (unknown routes, bad methods)."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=_error_content(request, "http_error", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Map FastAPI parameter/body parsing errors to a 400 validation error."""
        errors = [
            ErrorDetail(
                field=_field_path(tuple(error["loc"])),
                code=error["type"],
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        return ORJSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_content(
                request, "validation_error", "Request validation failed", errors
            ),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions."""
        from recipe_sharing.observability.logging import get_logger

        logger = get_logger(__name__)
        logger.opt(exception=exc).error("Unhandled exception")

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_content(
                request,
                "server_error",
                "Something went wrong. Please try again later.",
            ),
        )
