"""Request correlation ids.

Every request gets an id: the caller's ``X-Request-ID`` when it looks sane,
otherwise a fresh uuid4. The id ends up in three places: ``request.state``
(read by the error envelope), the response header, and the log context.
"""

from __future__ import annotations

import re
import uuid
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from recipe_sharing.observability.logging import bind_context, clear_context

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

# Echoed into JSON bodies and log lines
_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def new_request_id() -> str:
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Give each request a correlation id and start a fresh log context."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    def _choose_id(self, request: Request) -> str:
        supplied = request.headers.get(self.header_name, "")
        return supplied if _ACCEPTED_ID.match(supplied) else new_request_id()

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        clear_context()
        request_id = self._choose_id(request)
        request.state.request_id = request_id
        bind_context(request_id=request_id)

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
