"""Database Session Manager: async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - translate_db_errors shared by sessions and repositories: one mapping table
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from forms_api.core.errors import (
    DatabaseError, ErrorContext, IntegrityConstraintError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def translate_db_errors(
    session: AsyncSession, operation: str, form_id: str | None = None,
) -> AsyncGenerator[None, None]:
    """Roll back and re-raise SQLAlchemy errors as DatabaseError subclasses."""
    context = ErrorContext(form_id=form_id)
    extra = {"operation": operation, "form_id": form_id}
    try:
        yield
    except IntegrityError as e:
        await session.rollback()
        logger.error(f"DB integrity error: {e}", extra=extra)
        raise IntegrityConstraintError(
            "Integrity constraint violated", operation, context,
        ) from e
    except OperationalError as e:
        await session.rollback()
        logger.error(f"DB operational error: {e}", extra=extra)
        raise DatabaseError(
            "Connection or operational error", operation, context,
        ) from e
    except DBAPIError as e:
        await session.rollback()
        logger.error(f"DB driver error: {e}", extra=extra)
        raise DatabaseError("Database driver error", operation, context) from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"SQLAlchemy error: {e}", extra=extra)
        raise DatabaseError("Database operation failed", operation, context) from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            async with translate_db_errors(session, "session"):
                yield session
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (DatabaseError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
