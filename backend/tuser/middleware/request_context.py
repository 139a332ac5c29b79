from __future__ import annotations

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..observability.context import request_id_var

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id (caller's X-Request-Id or a new UUID) for logs and the response."""

    async def dispatch(self, request: Request, call_next):
        request_id = (request.headers.get(REQUEST_ID_HEADER) or "").strip() or str(uuid.uuid4())
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
