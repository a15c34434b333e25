"""
Veo3 Segment Generator API
FastAPI application that turns marketing scripts into structured video segments

This is the main entry point that wires together all routes and services.
"""

import traceback
import uuid
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import (
    API_DESCRIPTION,
    API_TITLE,
    API_VERSION,
    CORS_ORIGINS,
    MAX_REQUEST_BODY_BYTES,
    RATE_LIMIT_EXEMPT_PATHS,
    Settings,
)
from .context import AppContext
from .core import (
    ProviderError,
    SegmentStudioError,
    clear_context,
    get_logger,
    run_startup_checks,
    set_request_id,
    setup_logging,
)
from .routes import generation_router, health_router, runs_router, videos_router

logger = get_logger(__name__, service="api")


def _is_rate_limited_path(path: str) -> bool:
    if path in RATE_LIMIT_EXEMPT_PATHS or path.endswith("-status"):
        return False
    return path.startswith("/api/")


def _error_body(error: str, message: str, **extra) -> dict:
    body = {"error": error, "message": message, "errorId": str(uuid.uuid4())}
    body.update({key: value for key, value in extra.items() if value is not None})
    return body


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(SegmentStudioError)
    async def handle_app_error(request: Request, exc: SegmentStudioError):
        extra = {}
        if isinstance(exc, ProviderError):
            extra = {"provider": exc.provider, "errorType": exc.kind, "segmentNumber": exc.segment_number}
        message = exc.message
        if exc.http_status >= 500 and not isinstance(exc, ProviderError) and not settings.is_development:
            message = "Something went wrong"
        body = _error_body(exc.error_label, message, **extra)
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_id": body["errorId"], "status_code": exc.http_status, "path": request.url.path},
        )
        return JSONResponse(status_code=exc.http_status, content=body)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "Invalid request"))
        body = _error_body("Invalid request", message, details=jsonable_encoder(errors))
        return JSONResponse(status_code=400, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("Request failed", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        body = _error_body("Internal server error", "Something went wrong")
        logger.error(
            f"Unhandled error {body['errorId']}: {exc}",
            extra={
                "error_id": body["errorId"],
                # Correlation context is already cleared when this handler runs
                "request_id": getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID"),
                "path": request.url.path,
                "method": request.method,
            },
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        if settings.is_development:
            body["message"] = str(exc)
            body["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
            body["request"] = {"method": request.method, "path": request.url.path}
        return JSONResponse(status_code=500, content=body)


def create_app(settings: Optional[Settings] = None, context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Resolved settings; read from the environment when omitted
        context: Pre-built context (tests inject providers and repositories here)
    """
    if context is None:
        settings = settings or Settings.from_env()
        context = AppContext.from_settings(settings)
    settings = context.settings

    setup_logging(level=settings.log_level, log_file=settings.log_file, use_json=settings.use_json_logs)

    runtime_report = run_startup_checks(settings)
    for error in runtime_report["errors"]:
        logger.error(f"Startup check failed: {error}")
    for warning in runtime_report["warnings"]:
        logger.warning(f"Startup check: {warning}")
    logger.info("Starting Veo3 Segment Generator API", extra={
        "environment": settings.environment,
        "apis": context.providers.configured_flags(),
        "rate_limit_enabled": settings.rate_limit_enabled,
        "persist_runs": settings.persist_runs,
    })

    app = FastAPI(title=API_TITLE, description=API_DESCRIPTION, version=API_VERSION)
    app.state.context = context
    app.state.runtime_report = runtime_report

    @app.middleware("http")
    async def add_request_correlation(request: Request, call_next):
        """Add correlation ID, enforce request limits, and attach security headers."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        request.state.request_id = request_id
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        logger.info(f"{request.method} {path}", extra={
            "method": request.method,
            "path": path,
            "client": client_ip,
        })

        try:
            content_length = request.headers.get("content-length")
            if content_length:
                try:
                    size = int(content_length)
                except ValueError:
                    return JSONResponse(status_code=400, content=_error_body(
                        "Invalid request", "Invalid Content-Length header"))
                if size > MAX_REQUEST_BODY_BYTES:
                    return JSONResponse(status_code=413, content=_error_body(
                        "Payload too large",
                        f"Request body too large. Max allowed: {MAX_REQUEST_BODY_BYTES // (1024 * 1024)}MB",
                    ))

            if settings.rate_limit_enabled and request.method != "OPTIONS" and _is_rate_limited_path(path):
                decision = context.rate_limiter.check(client_ip)
                if not decision.allowed:
                    logger.warning("Rate limit exceeded", extra={"client": client_ip, "path": path})
                    return JSONResponse(
                        status_code=429,
                        content=_error_body(
                            "Too many requests",
                            "Too many requests from this IP, please try again later.",
                        ),
                        headers={"Retry-After": str(int(decision.retry_after) + 1)},
                    )

            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            response.headers.setdefault("X-Content-Type-Options", "nosniff")
            response.headers.setdefault("Referrer-Policy", "no-referrer")
            response.headers.setdefault("X-Frame-Options", "DENY")

            logger.info(f"Response: {response.status_code}", extra={
                "status_code": response.status_code,
                "method": request.method,
                "path": path,
            })

            return response
        finally:
            clear_context()

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, settings)

    app.include_router(generation_router)
    app.include_router(videos_router)
    app.include_router(health_router)
    app.include_router(runs_router)

    @app.get("/")
    async def root():
        """Root endpoint - API info"""
        return {
            "message": "Veo3 Segment Generator API - Turn scripts into video segments",
            "version": API_VERSION,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
