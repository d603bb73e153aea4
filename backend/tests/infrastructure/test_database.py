"""Database Session Manager — error mapping, health check and lifecycle.

Tests cover:
    - SQLAlchemy errors raised inside a session become DatabaseError
    - Constraint violations other than the date conflict surface as DatabaseError
    - health_check reports connectivity
    - SQLite pragmas applied on file databases
    - get_db_manager refuses to run before startup
"""

from types import SimpleNamespace

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from weightlog.core.errors import DatabaseError, InternalError
from weightlog.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)


async def test_operational_error_maps_to_database_error(db_manager):
    with pytest.raises(DatabaseError) as exc_info:
        async with db_manager.session():
            raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))
    assert exc_info.value.operation == "execute"
    assert "disk I/O" not in exc_info.value.message


async def test_check_constraint_violation_is_internal_error(db_manager):
    with pytest.raises(InternalError) as exc_info:
        async with db_manager.session() as db:
            await db.execute(
                text("INSERT INTO weights (weight, date) VALUES (-1, '2024-01-01')"),
            )
            await db.commit()
    assert exc_info.value.code == "DATABASE_ERROR"


async def test_direct_duplicate_insert_is_integrity_failure(db_manager):
    async with db_manager.session() as db:
        await db.execute(
            text("INSERT INTO weights (weight, date) VALUES (70, '2024-01-01')"),
        )
        await db.commit()
    with pytest.raises(DatabaseError):
        async with db_manager.session() as db:
            await db.execute(
                text("INSERT INTO weights (weight, date) VALUES (71, '2024-01-01')"),
            )


async def test_health_check_true_when_reachable(db_manager):
    assert await db_manager.health_check() is True


async def test_health_check_false_when_unreachable(tmp_path):
    missing = tmp_path / "no" / "such" / "dir" / "weights.db"
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{missing}")
    try:
        assert await manager.health_check() is False
    finally:
        await manager.close()


async def test_file_database_uses_wal_journal(file_db_manager):
    async with file_db_manager.session() as db:
        mode = (await db.execute(text("PRAGMA journal_mode"))).scalar_one()
        fks = (await db.execute(text("PRAGMA foreign_keys"))).scalar_one()
    assert mode.lower() == "wal"
    assert fks == 1


async def test_create_schema_is_idempotent(db_manager):
    await db_manager.create_schema()
    assert await db_manager.health_check() is True


def test_get_db_manager_requires_startup():
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))
    with pytest.raises(RuntimeError, match="Database not initialized"):
        get_db_manager(request)
