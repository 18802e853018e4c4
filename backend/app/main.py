"""Lead & Quiz API - FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - The DatabaseSessionManager is constructed once and owned by the app
      (app.state.db); handlers reach it only through dependencies
    - Global error handlers map ApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Frontend mounted after API routes so /api/* takes precedence

Design Decisions:
    - Lifespan over @app.on_event: startup verification and pool disposal in one place
    - verify_on_startup=False lets the process entry point run verification
      alongside the server so writes answer 503 until the store is confirmed
    - No app is built at import time; app/asgi.py holds the uvicorn target
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.cors import install_cors
from app.api.error_handlers import register_error_handlers
from app.api.routes import health, leads, quiz
from app.api.static import mount_frontend
from app.config import Settings, get_settings
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    db: DatabaseSessionManager | None = None,
    verify_on_startup: bool = True,
) -> FastAPI:
    """Build the application around an owned database manager."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = db or DatabaseSessionManager.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        if verify_on_startup:
            await db.verify()
        logger.info("Lead & Quiz API started", extra={"state": db.state.value})
        yield
        await db.dispose()
        logger.info("Lead & Quiz API shutting down")

    app = FastAPI(
        title="Lead & Quiz API", version=health.SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db

    install_cors(app, settings.cors_origins, trust_proxy=settings.trust_proxy)
    register_error_handlers(app)

    # Routes: explicit registration
    app.include_router(health.router)
    app.include_router(leads.router)
    app.include_router(quiz.router)

    if not mount_frontend(app, settings.static_dir):
        app.include_router(health.root_router)

    return app

