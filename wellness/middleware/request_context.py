"""Request id, timing and the per-request completion log line.

The id is the client's X-Request-ID when present (so a trace can span
the mobile app, the gateway and this service) or a fresh UUID, and is
echoed back on every response including errors.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from wellness.core.logging import request_id_var, user_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        tokens = (request_id_var.set(req_id), user_id_var.set("-"))
        start = time.monotonic()

        try:
            response = await call_next(request)
            duration_ms = round((time.monotonic() - start) * 1000, 1)
            logger.info(
                "%s %s -> %d (%.1fms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
        finally:
            request_id_var.reset(tokens[0])
            user_id_var.reset(tokens[1])

        response.headers[REQUEST_ID_HEADER] = req_id
        return response
