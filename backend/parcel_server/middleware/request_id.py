"""
Parcel Server — Request ID Middleware
======================================

What:  Assigns a correlation id to each request and echoes it in X-Request-ID.
How:   Reuses the client's X-Request-ID when present, otherwise generates a
       short uuid. The id is kept in a ContextVar so loggers and exception
       handlers can read it without access to the request object.

The frontend can log the id it sent and quote it in bug reports; the same id
then appears in every server log line of that request and in error bodies.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars are enough to correlate and keep log lines short
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
