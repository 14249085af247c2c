"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_sharing.main:app --reload

    # Or through the console script
    recipe-sharing
"""

from recipe_sharing.core.config import get_settings
from recipe_sharing.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "recipe_sharing.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
