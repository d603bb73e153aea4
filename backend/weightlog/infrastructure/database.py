"""Database Session Manager — one async engine per process with automatic rollback.

Invariants:
    - Exactly one engine per DatabaseSessionManager; created once, disposed on close()
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - SQLite connections run with WAL, a busy timeout and foreign keys enabled

Design Decisions:
    - Manager lives on app.state, created in the FastAPI lifespan and handed to
      routes through Depends (ADR: no module-level singleton, explicit lifecycle)
    - Pool sizing only for server databases: SQLite picks its own pool class
    - expire_on_commit=False: prevents lazy-load issues in async context
    - WAL journal: readers never block writers or each other; busy_timeout makes
      concurrent writers wait for the lock instead of failing with "locked"
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from weightlog.core.errors import DatabaseError
from weightlog.db.base import Base
import weightlog.models  # noqa: F401

logger = logging.getLogger(__name__)


def _is_sqlite(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def _is_memory_sqlite(database_url: str) -> bool:
    database = make_url(database_url).database
    return not database or database == ":memory:"


class DatabaseSessionManager:
    """Owns the engine and hands out sessions with rollback and error mapping."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        sqlite_busy_timeout_ms: int = 5_000,
    ):
        self.database_url = database_url
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not _is_sqlite(database_url):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        if _is_sqlite(database_url):
            self._install_sqlite_pragmas(
                sqlite_busy_timeout_ms,
                wal=not _is_memory_sqlite(database_url),
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def _install_sqlite_pragmas(self, busy_timeout_ms: int, wal: bool) -> None:
        @event.listens_for(self.engine.sync_engine, "connect")
        def _set_sqlite_pragmas(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
            if wal:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables (idempotent). Alembic owns real migrations."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose the engine and every pooled connection."""
        await self.engine.dispose()


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """FastAPI dependency: the process-wide manager created in the lifespan."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager
