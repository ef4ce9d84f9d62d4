"""Explore API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ExploreError -> structured JSON responses
    - Database initialized on startup and disposed on shutdown via lifespan
    - Every request is logged with status and duration

Design Decisions:
    - Lifespan context manager over @app.on_event
    - Schema created on startup when create_schema_on_startup is set; Alembic owns it otherwise
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from explore.api.error_handlers import register_error_handlers
from explore.api.middleware import RequestLoggingMiddleware
from explore.api.routes import explore, health
from explore.config import get_settings
from explore.infrastructure.database import close_db, init_db
from explore.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_recycle=settings.database_pool_recycle_seconds,
    )
    if settings.create_schema_on_startup:
        await manager.create_schema()
    logger.info("Explore API started")
    yield
    logger.info("Explore API shutting down")
    await close_db()
    logger.info("Explore API stopped")


app = FastAPI(
    title="Explore API", version="1.0.0", lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(health.router)
app.include_router(explore.router)

register_error_handlers(app)
