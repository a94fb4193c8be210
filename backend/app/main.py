"""Employee Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EmployeeRegistryError -> {"error": <message>}
    - CORS configured from settings (not hardcoded)
    - The connection pool is created in the lifespan, stored on app.state,
      and disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Tables created from ORM metadata at startup (no migration tooling)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import employees, health
from app.config import get_settings
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout_seconds,
        command_timeout=settings.database_command_timeout_seconds,
    )
    app.state.db_manager = db_manager
    try:
        if settings.database_create_tables:
            await db_manager.create_tables()
        logger.info("Employee Registry API started")
        yield
    finally:
        logger.info("Employee Registry API shutting down")
        app.state.db_manager = None
        await db_manager.close()


app = FastAPI(
    title="Employee Registry API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(employees.router)

register_error_handlers(app)


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
