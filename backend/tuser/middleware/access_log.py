from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..observability.logging import get_logger

log = get_logger("access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One structured line per request: method, path, status, duration."""

    def __init__(self, app, *, exclude_paths: set[str] | None = None):
        super().__init__(app)
        self._exclude = frozenset(exclude_paths or ())

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self._exclude:
            return await call_next(request)

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log.info(
                "request",
                http_method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
            )
