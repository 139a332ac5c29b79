from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse

from .settings import get_settings

PROBLEM_JSON = "application/problem+json"


def _default_title(status_code: int) -> str:
    if status_code == 400:
        return "Bad Request"
    if status_code == 404:
        return "Not Found"
    if status_code == 405:
        return "Method Not Allowed"
    if status_code == 422:
        return "Unprocessable Entity"
    if status_code >= 500:
        return "Internal Server Error"
    return "Error"


def _request_id(request: Request) -> str | None:
    rid = getattr(getattr(request, "state", None), "request_id", None)
    if rid:
        return str(rid)
    hdr = request.headers.get("x-request-id")
    return str(hdr) if hdr else None


def problem_response(
    *,
    request: Request,
    status_code: int,
    title: str | None = None,
    detail: str | None = None,
    extensions: dict[str, Any] | None = None,
) -> ORJSONResponse:
    # Never leak internal details in production for server errors.
    safe_detail = detail
    if int(status_code) >= 500 and get_settings().is_production:
        safe_detail = None

    payload: dict[str, Any] = {
        "type": "about:blank",
        "title": title or _default_title(int(status_code)),
        "status": int(status_code),
    }
    if safe_detail:
        payload["detail"] = str(safe_detail)
    inst = str(getattr(request.url, "path", "") or "")
    if inst:
        payload["instance"] = inst
    rid = _request_id(request)
    if rid:
        payload["requestId"] = rid
    if extensions:
        payload["extensions"] = extensions

    return ORJSONResponse(status_code=int(status_code), content=payload, media_type=PROBLEM_JSON)
