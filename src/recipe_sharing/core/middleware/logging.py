"""Access log.

One ``Request received`` line when a request comes in and one
``Request handled`` line when it leaves. The level of the second line
follows the status class: info below 400, warning for client errors,
error for server errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from recipe_sharing.observability.logging import bind_context, get_logger

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)


def client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Write the access log and bind method, path and acting user."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        quiet_paths: set[str] | None = None,
        actor_header: str = "X-User-ID",
    ) -> None:
        super().__init__(app)
        self.quiet_paths = quiet_paths if quiet_paths is not None else {"/health"}
        self.actor_header = actor_header

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in self.quiet_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            actor=request.headers.get(self.actor_header),
        )
        logger.info(
            "Request received",
            client_ip=client_address(request),
            query=str(request.query_params) or None,
        )

        response = await call_next(request)

        status = response.status_code
        if status >= 500:
            log = logger.error
        elif status >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            "Request handled",
            status_code=status,
            duration_ms=getattr(request.state, "duration_ms", None),
        )
        return response
