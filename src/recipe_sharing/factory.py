"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application from settings
- Sets up the middleware stack in the correct order
- Registers exception handlers
- Mounts the API router under the configured prefix
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_sharing.api.router import router as api_router
from recipe_sharing.core.config import Settings, get_settings
from recipe_sharing.core.events import lifespan
from recipe_sharing.core.exceptions import setup_exception_handlers
from recipe_sharing.core.middleware import (
    LoggingMiddleware,
    RequestIDMiddleware,
    TimingMiddleware,
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Repositories are not created here but in the lifespan, so building an
    app has no side effects on storage.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipe sharing service - recipes, users, comments and ratings",
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        debug=settings.app.debug,
    )

    # Read by the lifespan and the settings dependency
    app.state.settings = settings

    setup_exception_handlers(app)

    # Middleware order matters - first added = last executed
    _setup_middleware(app, settings)

    app.include_router(api_router, prefix=settings.api.prefix)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Outermost first: RequestIDMiddleware, LoggingMiddleware, TimingMiddleware,
    then CORSMiddleware when origins are configured. The access log reads
    ``request.state.duration_ms`` set by the inner timing layer.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    prefix = settings.api.prefix
    app.add_middleware(TimingMiddleware, slow_ms=settings.logging.slow_request_ms)
    app.add_middleware(
        LoggingMiddleware,
        quiet_paths={f"{prefix}/health", f"{prefix}/ready", "/favicon.ico"},
        actor_header=settings.auth.user_id_header,
    )
    app.add_middleware(RequestIDMiddleware)
