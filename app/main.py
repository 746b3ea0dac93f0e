# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the RealTrust API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 5000
#   python -m app.main   (or the realtrust-api script)
# =============================================================================

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings as default_settings
from app.dependencies import build_record_store
from app.exceptions import (
    RealTrustException,
    general_exception_handler,
    http_exception_handler,
    realtrust_exception_handler,
    validation_exception_handler,
)
from app.middleware import RequestBodyLimitMiddleware
from app.routers import clients, contact_form, contacts, health, projects, subscribers
from core.services.media_service import build_codec
from core.services.record_service import RecordService
from lib.record_store import RecordStore

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the active configuration and whether the record store answers.
    """
    config: Settings = app.state.settings
    logger.info(f"Starting RealTrust API in {config.ENVIRONMENT} mode")
    logger.info(f"Record store: {config.store_backend}")
    logger.info(f"Image storage: {app.state.image_codec.description}")

    if app.state.record_service.is_connected():
        logger.info("Record store connected")
    else:
        logger.warning("Record store NOT connected; contact form will degrade to mock receipts")

    yield

    logger.info("Shutting down RealTrust API")


def create_app(
    settings: Settings | None = None,
    store: RecordStore | None = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Configuration (defaults to environment-loaded settings)
        store: Record store handle (defaults to the configured backend)

    Returns:
        Configured FastAPI application.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="RealTrust API",
        description="Marketing-site backend: projects, client testimonials, leads and newsletter subscribers.",
        version=API_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Projects", "description": "Showcase projects with images"},
            {"name": "Clients", "description": "Client testimonials with photos"},
            {"name": "Contacts", "description": "Contact leads"},
            {"name": "Subscribers", "description": "Newsletter signups"},
            {"name": "Health", "description": "API health and store connectivity"},
        ],
    )

    app.state.settings = settings
    app.state.record_service = RecordService(store or build_record_store(settings))
    app.state.image_codec = build_codec(settings)

    # =========================================================================
    # Middleware
    # =========================================================================

    # Must stay inside CORSMiddleware (added before it)
    app.add_middleware(
        RequestBodyLimitMiddleware,
        max_body_bytes=settings.max_request_body_bytes,
        max_mb=settings.MAX_REQUEST_BODY_MB,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(RealTrustException, realtrust_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    prefix = settings.API_PREFIX.rstrip("/")
    stored_mode = settings.IMAGE_STORAGE_MODE == "stored"

    app.include_router(health.router, prefix=prefix, tags=["Health"])

    # One image strategy per deployment; the route variants are not mixed
    app.include_router(
        projects.upload_router if stored_mode else projects.inline_router,
        prefix=f"{prefix}/projects",
        tags=["Projects"],
    )
    app.include_router(
        clients.upload_router if stored_mode else clients.inline_router,
        prefix=f"{prefix}/clients",
        tags=["Clients"],
    )

    app.include_router(contacts.router, prefix=f"{prefix}/contact", tags=["Contacts"])
    app.include_router(contact_form.router, prefix=prefix, tags=["Contacts"])
    app.include_router(subscribers.router, prefix=f"{prefix}/subscribers", tags=["Subscribers"])

    if stored_mode:
        upload_dir = Path(settings.UPLOAD_DIR)
        upload_dir.mkdir(parents=True, exist_ok=True)
        app.mount(
            "/" + settings.UPLOAD_URL_PREFIX.strip("/"),
            StaticFiles(directory=str(upload_dir)),
            name="uploads",
        )

    @app.get("/", tags=["Health"])
    async def root():
        """API banner with version and database status."""
        connected = app.state.record_service.is_connected()
        return {
            "message": "RealTrust API is running",
            "version": API_VERSION,
            "status": "OK",
            "database": "connected" if connected else "disconnected",
        }

    return app


# Default app instance
app = create_app()


def run(config: Settings | None = None) -> None:
    """Serve the default app on API_HOST:API_PORT (reloads when DEBUG is set)."""
    config = config or default_settings
    uvicorn.run(
        "app.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.DEBUG,
    )


if __name__ == "__main__":
    run()
