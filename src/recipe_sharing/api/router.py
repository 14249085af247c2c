"""API router aggregating all endpoint routers.

Mounted under ``api.prefix`` (empty by default).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_sharing.api.endpoints import comments, health, recipes, users


router = APIRouter()

router.include_router(health.router)
router.include_router(recipes.router)
router.include_router(users.router)
router.include_router(comments.router)
