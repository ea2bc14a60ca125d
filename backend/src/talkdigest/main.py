"""TalkDigest Backend - Main FastAPI Application

Mail ingestion and AI talk-summary service.

This module creates and configures the FastAPI application, including:
- Lifespan: service container, delayed auto-connect, mail poller
- Middleware (request ID correlation, CORS)
- Exception handlers mapping domain errors to HTTP responses
- Routers (inbox, publishing, observability)
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .container import TalkDigestService, build_service
from .domain.errors import (
    AlreadyConnectingError,
    MailboxConnectionError,
    MessageNotFoundError,
    NotConnectedError,
    TalkDigestError,
)
from .inbox.router import router as inbox_router
from .observability.logging_config import configure_logging
from .observability.middleware import RequestIDMiddleware
from .observability.router import router as observability_router
from .publishing.router import router as publishing_router
from .workers.mail_poller import auto_connect, poll_mailbox

logger = logging.getLogger(__name__)

# Domain error → HTTP status
ERROR_STATUS_CODES = {
    MailboxConnectionError: status.HTTP_502_BAD_GATEWAY,
    AlreadyConnectingError: status.HTTP_409_CONFLICT,
    NotConnectedError: status.HTTP_400_BAD_REQUEST,
    MessageNotFoundError: status.HTTP_404_NOT_FOUND,
}


def _start_background_tasks(service: TalkDigestService) -> list[asyncio.Task]:
    settings = service.settings
    tasks = []
    if settings.MAIL_AUTO_CONNECT:
        tasks.append(asyncio.create_task(
            auto_connect(service, settings.MAIL_AUTO_CONNECT_DELAY_SECONDS)
        ))
    if settings.FETCH_INTERVAL_SECONDS and settings.FETCH_INTERVAL_SECONDS > 0:
        tasks.append(asyncio.create_task(
            poll_mailbox(service, settings.FETCH_INTERVAL_SECONDS)
        ))
    return tasks


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[TalkDigestService] = None,
) -> FastAPI:
    """Application factory.

    Args:
        settings: Settings to use (defaults to environment settings)
        service: Pre-built service container (tests); built from settings
            in the lifespan otherwise
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler.

        - Startup: build services, schedule auto-connect, start the poller
        - Shutdown: stop background tasks, close the mailbox session
        """
        configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
        logger.info("TalkDigest API starting up...")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug mode: {settings.DEBUG}")

        app.state.service = service or build_service(settings)
        tasks = _start_background_tasks(app.state.service)

        yield

        logger.info("TalkDigest API shutting down...")
        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task
        await app.state.service.connection_manager.disconnect()

    is_production = settings.is_production
    app = FastAPI(
        title="TalkDigest API",
        description="Mailbox ingestion and AI summaries of club talks",
        version=__version__,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        lifespan=lifespan,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(TalkDigestError)
    async def domain_exception_handler(request: Request, exc: TalkDigestError) -> JSONResponse:
        """Map domain errors onto their HTTP status with a structured body."""
        status_code = next(
            (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        logger.warning(
            f"{exc.code} on {request.method} {request.url.path}: {exc}",
            extra={"status_code": status_code},
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "message": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors.

        Returns a structured error response with field-level details.
        """
        logger.warning(f"Validation error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": exc.errors(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions.

        Full details are logged but not exposed to the client.
        """
        logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred. Please try again later.",
            },
        )

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(observability_router)
    app.include_router(inbox_router)
    app.include_router(publishing_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, Any]:
        """Root endpoint - API information."""
        return {
            "name": "TalkDigest API",
            "version": __version__,
            "status": "running",
            "endpoints": [
                "GET /api/status",
                "POST /api/connect",
                "GET /api/emails",
                "POST /api/process-email/{message_id}",
                "POST /api/facebook-publish",
                "POST /api/send-email",
                "GET /health",
            ],
        }

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import os

    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "talkdigest.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.DEBUG and not settings.is_production,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
