"""YAML settings source with environment-based file merging."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

# Overrides the config directory, mainly for tests and packaged installs
CONFIG_DIR_ENV = "RECIPE_SHARING_CONFIG_DIR"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in, recursing into dicts."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml_dir(directory: Path) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    if not directory.exists():
        return merged
    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            merged = deep_merge(merged, yaml.safe_load(f) or {})
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load ``config/base/*.yaml`` then deep-merge ``config/environments/{APP_ENV}/``."""

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        self._config_dir = self._find_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        self._yaml_data = deep_merge(
            _read_yaml_dir(self._config_dir / "base"),
            _read_yaml_dir(self._config_dir / "environments" / self._app_env),
        )

    def _find_config_dir(self) -> Path:
        """Locate the config directory (project root unless overridden)."""
        override = os.getenv(CONFIG_DIR_ENV)
        if override:
            return Path(override)
        # src/recipe_sharing/core/config/yaml_source.py -> project root
        return Path(__file__).resolve().parents[4] / "config"

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Get the value for a specific field from YAML data."""
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        """Return all merged YAML configuration data."""
        return self._yaml_data
