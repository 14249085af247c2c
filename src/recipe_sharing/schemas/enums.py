"""Enumeration types for recipe schemas."""

from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    """Recipe categories."""

    SOUPS = "Polievky"
    MAIN_COURSES = "Hlavné jedlá"
    DESSERTS = "Dezerty"


class Difficulty(StrEnum):
    """Recipe difficulty levels."""

    EASY = "Jednoduchá"
    MEDIUM = "Stredná"
    HARD = "Ťažká"
