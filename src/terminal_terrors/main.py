# src/terminal_terrors/main.py
"""Main entry point for the Terminal Terrors backend."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from terminal_terrors.api.v1 import auth_router, player_router
from terminal_terrors.core.errors import TerrorsError, ValidationFailedError
from terminal_terrors.core.log_config import configure_logging
from terminal_terrors.core.settings import settings
from terminal_terrors.db.session import create_tables
from terminal_terrors.db.time import utcnow
from terminal_terrors.schemas.auth import ErrorResponse
from terminal_terrors.services.presence_sweeper import PresenceSweepWorker

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Terminal Terrors API",
    description="Accounts, save data, and online presence for Terminal Terrors",
    version=settings.app_version,
)

# Browser builds are served from itch.io hosts.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.add_middleware(GZipMiddleware)

app.include_router(auth_router, prefix="/api/v1")
app.include_router(player_router, prefix="/api/v1")


def _error_response(error: TerrorsError) -> JSONResponse:
    body = ErrorResponse(error=error.kind, detail=error.message)
    return JSONResponse(status_code=error.status_code, content=body.model_dump())


@app.exception_handler(TerrorsError)
async def handle_terrors_error(request: Request, exc: TerrorsError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return _error_response(ValidationFailedError("; ".join(problems) or None))


@app.middleware("http")
async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    client = request.client.host if request.client else "-"
    logger.info("%s %s - %s", request.method, request.url.path, client)
    return await call_next(request)


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if settings.uses_default_secret:
        logger.warning("SECRET_KEY is not set; using the insecure development default")
    if settings.auto_create_tables:
        create_tables()
    if settings.presence_sweep_enabled:
        worker = PresenceSweepWorker()
        await worker.start()
        app.state.presence_sweeper = worker
    else:
        app.state.presence_sweeper = None
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    worker: PresenceSweepWorker | None = getattr(app.state, "presence_sweeper", None)
    if worker:
        await worker.stop()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "timestamp": utcnow().isoformat(),
    }


@app.get("/")
async def root() -> dict[str, object]:
    """Root endpoint with basic information about the API."""
    return {
        "message": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "endpoints": {
            "health": "/health",
            "auth": {
                "register": "POST /api/v1/auth/register",
                "login": "POST /api/v1/auth/login",
                "logout": "POST /api/v1/auth/logout",
                "verify": "GET /api/v1/auth/verify",
            },
            "player": {
                "data": "GET /api/v1/player/data",
                "save": "PUT /api/v1/player/data",
                "online": "GET /api/v1/player/online",
                "heartbeat": "POST /api/v1/player/heartbeat",
            },
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "terminal_terrors.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
