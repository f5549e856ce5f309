"""Customer Forms API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FormsApiError / validation / Exception to the uniform envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager; startup fails
      when the database is unreachable and the connectivity check is enabled

Design Decisions:
    - Lifespan over @app.on_event
    - create_app() factory: tests build the app without running the lifespan
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forms_api.api.error_handlers import register_error_handlers
from forms_api.api.routes import customer_forms, health
from forms_api.config import Settings, get_settings
from forms_api.infrastructure.database import close_db, init_db
from forms_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


class DatabaseUnavailableError(RuntimeError):
    """Startup connectivity check failed."""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.environment)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_check_on_startup:
        if not await manager.health_check():
            await close_db()
            raise DatabaseUnavailableError("Database connection failed")
        logger.info("Database connection successful")
    logger.info(
        "Customer Forms API started",
        extra={"environment": settings.environment.value},
    )
    yield
    logger.info("Customer Forms API shutting down")
    await close_db()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Customer Forms API", version="1.0.0", lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(customer_forms.router)

    register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "forms_api.main:app", host=settings.host, port=settings.port,
    )
