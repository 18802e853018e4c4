"""Database Session Manager - owned async connection pool with readiness state.

Invariants:
    - One manager per app, constructed explicitly and passed in (no module singleton)
    - state starts NOT_READY; verify() moves it to READY or FAILED, nothing else does
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)

Design Decisions:
    - verify() raises StartupError instead of exiting: the entry point decides
    - Pool sizing arguments only for server backends; SQLite uses its own pool
    - database_ssl maps to asyncpg ssl="require" (encrypted, unverified)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.config import Settings
from app.core.domain_types import ReadinessState
from app.core.errors import DatabaseError, StartupError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and readiness."""

    def __init__(
        self,
        database_url: str,
        ssl: bool = False,
        pool_size: int = 10,
        max_overflow: int = 5,
    ):
        url = make_url(database_url)
        engine_kwargs: dict = {"pool_pre_ping": True}
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        if ssl and url.get_driver_name() == "asyncpg":
            engine_kwargs["connect_args"] = {"ssl": "require"}
        self.engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self.state = ReadinessState.NOT_READY

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseSessionManager":
        return cls(
            settings.resolved_database_url(),
            ssl=settings.database_ssl,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @property
    def is_ready(self) -> bool:
        return self.state is ReadinessState.READY

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}", exc_info=True)
            raise DatabaseError("commit") from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}", exc_info=True)
            raise DatabaseError("execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}", exc_info=True)
            raise DatabaseError("query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}", exc_info=True)
            raise DatabaseError("unknown") from e
        finally:
            await session.close()

    async def verify(self) -> None:
        """Startup readiness probe. Raises StartupError if the store is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            self.state = ReadinessState.FAILED
            logger.critical(
                f"Database readiness check failed: {e}",
                exc_info=True, extra={"state": self.state.value},
            )
            raise StartupError("Database unreachable at startup", cause=e) from e
        self.state = ReadinessState.READY
        logger.info(
            "Database connection verified", extra={"state": self.state.value},
        )

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
