"""Configuration module with YAML and environment variable support."""

from .settings import (
    AuthPolicy,
    Settings,
    StorageBackend,
    UpdateMode,
    get_settings,
)


__all__ = [
    "AuthPolicy",
    "Settings",
    "StorageBackend",
    "UpdateMode",
    "get_settings",
]
