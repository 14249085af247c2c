"""Recipe ratings and user favorites."""

from recipe_sharing.services.engagement.service import (
    MAX_RATING,
    MIN_RATING,
    EngagementService,
    average_rating,
)


__all__ = [
    "MAX_RATING",
    "MIN_RATING",
    "EngagementService",
    "average_rating",
]
