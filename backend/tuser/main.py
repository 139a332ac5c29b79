from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from .errors import ConfigError
from .middleware.access_log import AccessLogMiddleware
from .middleware.request_context import RequestContextMiddleware
from .observability.logging import configure_logging, get_logger
from .problem_details import problem_response
from .routers.health import router as health_router
from .routers.slack_commands import router as slack_router
from .settings import settings


def create_app() -> FastAPI:
    # Logging must be configured before the app starts handling requests.
    configure_logging(level=settings.log_level)
    log = get_logger("startup")

    app = FastAPI(
        title="tuser",
        version="0.1.0",
        default_response_class=ORJSONResponse,
        redirect_slashes=False,
    )

    log.info("app_starting", settings=settings.to_log_safe_dict())

    # Middlewares (last added is outermost)
    app.add_middleware(AccessLogMiddleware, exclude_paths={"/"})
    app.add_middleware(RequestContextMiddleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ConfigError, _config_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    # Routes
    app.include_router(health_router)
    app.include_router(slack_router)

    return app


def _config_error_handler(request: Request, exc: ConfigError) -> Response:
    # Operator-facing: Slack just sees the command fail.
    get_logger("config").error(
        "config_error",
        kind=exc.kind.value,
        secret_id=exc.secret_id,
        path=str(request.url.path),
    )
    return problem_response(
        request=request,
        status_code=500,
        title="Configuration Error",
        detail=str(exc),
        extensions={"kind": exc.kind.value},
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    status_code = int(getattr(exc, "status_code", 500) or 500)
    detail = getattr(exc, "detail", None)
    safe_detail = str(detail) if detail is not None else None
    if status_code == 404:
        safe_detail = safe_detail or "Route not found"
    return problem_response(request=request, status_code=status_code, detail=safe_detail)


def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    errors = [
        {"path": ".".join(str(x) for x in (e.get("loc") or ()) if x != "body"), "message": e.get("msg")}
        for e in exc.errors()
    ]
    return problem_response(
        request=request,
        status_code=422,
        title="Validation Failed",
        detail="Request validation failed",
        extensions={"errors": errors},
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    # Full traceback goes to the logs; the response stays generic in production.
    get_logger("unhandled").exception(
        "unhandled_exception",
        http_method=str(getattr(request, "method", "") or "").upper() or None,
        path=str(getattr(getattr(request, "url", None), "path", "") or ""),
    )
    return problem_response(
        request=request,
        status_code=500,
        title="Internal Server Error",
        detail=str(exc) if exc else None,
    )


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
