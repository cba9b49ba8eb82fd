# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the form relay.
# It configures the FastAPI application with middleware, routers, and handlers,
# and wires the relay client and attachment stager from Settings.
#
# Usage:
#   formrelay                                   (console script, reads PORT)
#   python -m app.main
#   uvicorn app.main:create_app --factory --reload
# =============================================================================

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app import __version__
from app.config import Settings, get_settings
from app.exceptions import (
    FormRelayException,
    OriginNotAllowedError,
    form_relay_exception_handler,
    unexpected_exception_handler,
)
from app.routers import apply, contact, health
from core.services.attachment_stager import AttachmentStager
from core.services.mail_relay import MailRelayClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format=LOG_FORMAT,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: Log the effective configuration
    - Shutdown: Nothing to release; relay connections are per send
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting form relay in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Relay: {settings.SMTP_HOST}:{settings.SMTP_PORT} -> {settings.receiver_email}")
    logger.info(f"Scratch directory: {settings.upload_path.resolve()}")

    yield

    logger.info("Shutting down form relay")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; loaded from the environment when omitted

    Raises:
        pydantic.ValidationError: If settings are loaded here and invalid
            (for example, no recipient address)
        StorageError: If the scratch directory cannot be created
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Form Relay",
        description="Relays job-application and contact form submissions by email.",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Forms",
                "description": "Job application and contact form submissions",
            },
            {
                "name": "Health",
                "description": "Health and readiness checks",
            },
        ],
    )

    # =========================================================================
    # Shared State
    # =========================================================================

    stager = AttachmentStager(settings.upload_path, settings.max_upload_size_bytes)
    stager.ensure_directory()

    app.state.settings = settings
    app.state.attachment_stager = stager
    app.state.mail_relay = MailRelayClient.from_settings(settings)

    # =========================================================================
    # Middleware
    # =========================================================================

    allowed_origins = settings.cors_origins_list

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    # Added after CORS, so it runs first
    @app.middleware("http")
    async def reject_unknown_origins(request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is not None and origin not in allowed_origins:
            exc = OriginNotAllowedError(origin)
            logger.warning(f"Rejected {request.method} {request.url.path} from origin {origin!r}")
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
        return await call_next(request)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(FormRelayException, form_relay_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(apply.router, prefix="/backend", tags=["Forms"])
    app.include_router(contact.router, prefix="/backend", tags=["Forms"])
    app.include_router(health.router, tags=["Health"])

    return app


def run() -> None:
    """Load settings, refuse to start without a recipient, then serve."""
    try:
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(f"Invalid configuration, not starting: {e}")
        sys.exit(1)

    app = create_app(settings)
    logger.info(f"Server running on port {settings.PORT}")
    uvicorn.run(app, host=settings.API_HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
