"""Health check endpoints.

Provides liveness and readiness probes for load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from recipe_sharing.api.dependencies import get_app_settings
from recipe_sharing.core.config import Settings  # noqa: TC001


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(HealthResponse):
    """Readiness check response with storage status."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of the collection store",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Check if the service is alive without touching storage."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check verifying the collection store is usable.",
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    """Check if the service can read and write its collections."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        storage = "not_initialized"
    else:
        storage = "healthy" if store.check() else "unhealthy"

    return ReadinessResponse(
        status="ready" if storage == "healthy" else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies={"storage": storage},
    )
