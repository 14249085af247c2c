"""Settings factory for generating test configurations.

Uses polyfactory for consistent test data generation.
"""

from __future__ import annotations

from pathlib import Path

from polyfactory.factories.pydantic_factory import ModelFactory

from recipe_sharing.core.config import AuthPolicy, Settings, StorageBackend
from recipe_sharing.core.config.settings import (
    ApiSettings,
    AppSettings,
    AuthSettings,
    CommentsSettings,
    LoggingSettings,
    PaginationSettings,
    RecipesSettings,
    ServerSettings,
    StorageSettings,
)


class SettingsFactory(ModelFactory[Settings]):
    """Factory for generating Settings instances.

    Defaults to the in-memory store and the permissive actor policy.
    """

    __model__ = Settings

    APP_ENV = "test"

    app = AppSettings(name="Test Recipe Sharing", version="0.0.1-test", debug=True)
    server = ServerSettings(host="127.0.0.1", port=8000)
    api = ApiSettings(prefix="", cors_origins=[])
    auth = AuthSettings(policy=AuthPolicy.PERMISSIVE)
    storage = StorageSettings(backend=StorageBackend.MEMORY)
    recipes = RecipesSettings(cascade_favorites=True)
    comments = CommentsSettings(require_existing_recipe=True)
    pagination = PaginationSettings(default_limit=10)
    logging = LoggingSettings(level="WARNING", format="text")

    @classmethod
    def strict(cls, **kwargs: object) -> Settings:
        """Create settings that reject missing or unknown actors."""
        return cls.build(auth=AuthSettings(policy=AuthPolicy.STRICT), **kwargs)

    @classmethod
    def on_disk(
        cls,
        data_dir: Path,
        backend: StorageBackend = StorageBackend.JSON,
        **kwargs: object,
    ) -> Settings:
        """Create settings persisting collections under ``data_dir``."""
        return cls.build(
            storage=StorageSettings(
                backend=backend,
                data_dir=str(data_dir),
                compaction_threshold=5,
            ),
            **kwargs,
        )
