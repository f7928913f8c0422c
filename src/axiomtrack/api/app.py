"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from axiomtrack.api.routes import axiom, health, meme
from axiomtrack.config.logging import configure_logging
from axiomtrack.config.settings import get_settings
from axiomtrack.core.dependencies import ServiceContainer

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    log.info("application_starting")
    configure_logging()

    container = ServiceContainer.get_instance()
    if not container.credentials.has_credentials():
        log.warning("axiom_credentials_missing", effect="serving fallback data")

    log.info("application_started")

    yield

    log.info("application_stopping")
    try:
        await ServiceContainer.shutdown()
    except Exception as e:
        log.warning("service_shutdown_error", error=str(e))
    log.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Axiom market data, launch feed and token signal scoring",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(axiom.router, prefix="/api")
    app.include_router(meme.router, prefix="/api")

    return app
