"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Settings never point at a real database file during tests
    - Every test gets a fresh in-memory SQLite database with the schema created
    - file_db_manager gives a real on-disk database for multi-connection tests
"""

import os

# Must run before weightlog.main is imported: get_settings() is cached
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("STATIC_DIR", "__no_static_dir__")

import pytest

from weightlog.infrastructure.database import DatabaseSessionManager
from weightlog.infrastructure.weight_repository import WeightRepository


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_schema()
    yield manager
    await manager.close()


@pytest.fixture
async def file_db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'weights.db'}",
    )
    await manager.create_schema()
    yield manager
    await manager.close()


@pytest.fixture
async def test_db(db_manager):
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def repo(test_db):
    return WeightRepository(test_db)
