"""Usercontent API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserContentError → static HTML error pages
    - Database initialized on startup via lifespan context manager
    - /static is mounted after the routers so /fs/* always takes precedence

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py and are registered here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.routes import fs, health
from app.config import get_settings
from app.infrastructure import database
from app.infrastructure.mime_db import get_mime_database
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    get_mime_database()
    logger.info("Usercontent API started")
    yield
    if database.db_manager:
        await database.db_manager.close()
    logger.info("Usercontent API shutting down")


app = FastAPI(
    title="Usercontent API", version="1.0.0", lifespan=lifespan,
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(fs.router)

register_error_handlers(app)

settings = get_settings()
if settings.static_dir.is_dir():
    app.mount(
        "/static", StaticFiles(directory=settings.static_dir), name="static",
    )
