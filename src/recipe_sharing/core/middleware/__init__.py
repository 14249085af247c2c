"""Custom middleware components."""

from recipe_sharing.core.middleware.logging import LoggingMiddleware
from recipe_sharing.core.middleware.request_id import RequestIDMiddleware
from recipe_sharing.core.middleware.timing import TimingMiddleware

__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
