"""Request Middleware — counts and logs every inbound request.

Invariants:
    - The counter is incremented before the request reaches CORS or routing,
      so preflights and unknown paths are counted too
    - One log line per completed request: method, path, status, duration, client
    - The counter is injected; this module holds no process-wide state
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from records_api.infrastructure.observability import RequestCounter

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request counting and access logging."""

    def __init__(self, app: ASGIApp, counter: RequestCounter):
        super().__init__(app)
        self.counter = counter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        count = self.counter.increment()
        start = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} - "
            f"{response.status_code} - {duration_ms}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "client_ip": client_ip,
                "request_count": count,
            },
        )
        return response
