"""Request id propagation.

Every response carries ``x-request-id`` (taken from the request or freshly
generated) and ``x-correlation-id`` (passed through from upstream, falling
back to the request id). Both are visible to log records emitted while the
request is handled.
"""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from syllabus.observability.logging import LogContext

REQUEST_ID_HEADER = "x-request-id"
CORRELATION_ID_HEADER = "x-correlation-id"


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind request and correlation ids to the logging context."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or request_id
        request.state.request_id = request_id

        with LogContext(request_id=request_id, correlation_id=correlation_id):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
