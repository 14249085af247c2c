"""Per-request wall clock.

The measured duration is written to ``X-Process-Time`` and kept on
``request.state.duration_ms`` so the access log can report it.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from recipe_sharing.observability.logging import get_logger

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """Time each request and flag the ones slower than ``slow_ms``.

    Warnings for POST, PUT and DELETE carry ``write=True``; those are the
    requests that end in a store save.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        slow_ms: float = 500.0,
        header_name: str = "X-Process-Time",
    ) -> None:
        super().__init__(app)
        self.slow_ms = slow_ms
        self.header_name = header_name

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        request.state.duration_ms = duration_ms
        response.headers[self.header_name] = f"{duration_ms}ms"
        if duration_ms > self.slow_ms:
            logger.warning(
                "Slow request",
                method=request.method,
                path=request.url.path,
                duration_ms=duration_ms,
                write=request.method in {"POST", "PUT", "DELETE"},
            )
        return response
