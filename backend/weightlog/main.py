"""Weight Log API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WeightLogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - One DatabaseSessionManager per app, on app.state, closed on shutdown

Design Decisions:
    - create_app factory: tests build an app around their own manager; the
      module-level `app` is what uvicorn serves
    - Lifespan over @app.on_event: cleaner cleanup
    - A manager passed to create_app is owned by the caller and not closed here
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from weightlog import __version__
from weightlog.api.error_handlers import register_error_handlers
from weightlog.api.routes import health, weights
from weightlog.config import Settings, get_settings
from weightlog.infrastructure.database import DatabaseSessionManager
from weightlog.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def _build_db_manager(settings: Settings) -> DatabaseSessionManager:
    return DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        sqlite_busy_timeout_ms=settings.sqlite_busy_timeout_ms,
    )


def _make_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        owned = getattr(app.state, "db_manager", None) is None
        if owned:
            app.state.db_manager = _build_db_manager(settings)
        if settings.auto_create_schema:
            await app.state.db_manager.create_schema()
        logger.info("Weight Log API started")
        yield
        logger.info("Weight Log API shutting down")
        if owned:
            await app.state.db_manager.close()
            app.state.db_manager = None

    return lifespan


def create_app(
    settings: Settings | None = None,
    db_manager: DatabaseSessionManager | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Weight Log API", version=__version__,
        lifespan=_make_lifespan(settings),
    )
    app.state.db_manager = db_manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(weights.router)

    # Mounted after the API routes so /api/* takes precedence;
    # html=True serves index.html for unknown paths
    if os.path.isdir(settings.static_dir):
        app.mount(
            "/", StaticFiles(directory=settings.static_dir, html=True),
            name="static",
        )

    register_error_handlers(app)
    return app


app = create_app()
