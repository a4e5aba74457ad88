"""Library API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the failure envelope
    - CORS configured from settings (not hardcoded)
    - Database manager constructed, pinged and attached to app.state.db on
      startup; an unreachable database aborts startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from library_api.api.error_handlers import register_error_handlers
from library_api.api.routes import books, borrows, health
from library_api.config import get_settings
from library_api.core.errors import DatabaseError
from library_api.infrastructure.database import DatabaseSessionManager
from library_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        await db.ping()
    except DatabaseError:
        logger.critical("Failed to connect to the database", exc_info=True)
        await db.close()
        raise
    if settings.create_tables:
        await db.create_tables()
    app.state.db = db
    logger.info("Library API started")
    try:
        yield
    finally:
        logger.info("Library API shutting down")
        app.state.db = None
        await db.close()


app = FastAPI(title="Library API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(books.router)
app.include_router(borrows.router)

register_error_handlers(app)
