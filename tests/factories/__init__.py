"""Factory configuration and exports.

This module exports all factories for convenient importing in tests.
"""

from tests.factories.entities import RecipeFactory, UserFactory
from tests.factories.payloads import comment_payload, recipe_payload, user_payload
from tests.factories.settings import SettingsFactory


__all__ = [
    "RecipeFactory",
    "SettingsFactory",
    "UserFactory",
    "comment_payload",
    "recipe_payload",
    "user_payload",
]
