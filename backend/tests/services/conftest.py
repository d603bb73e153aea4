"""Service test fixtures — handlers over a real database or a failing store.

Invariants:
    - handlers uses the in-memory database from the root conftest
    - failing_handlers never touches SQL: every store call raises
    - client is an httpx AsyncClient bound to an app built around db_manager

Design Decisions:
    - create_app(db_manager=...) instead of dependency overrides for storage:
      the app reads its manager from app.state, same path as production
    - ASGITransport does not run the lifespan, so the app never builds its
      own manager or touches the configured DATABASE_URL
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from weightlog.api.routes.weights import get_weight_handlers
from weightlog.config import Settings
from weightlog.core.errors import DatabaseError
from weightlog.main import create_app
from weightlog.services.handle_weights import WeightHandlers


class FailingStore:
    """Store whose every call fails like an unavailable database."""

    def __init__(self, db=None, exc: Exception | None = None):
        self.exc = exc or DatabaseError("Connection or operational error", "execute")
        self.calls = []

    async def _fail(self, name, *args):
        self.calls.append(name)
        raise self.exc

    async def upsert(self, weight, entry_date):
        await self._fail("upsert", weight, entry_date)

    async def list_all(self):
        await self._fail("list_all")

    async def latest(self):
        await self._fail("latest")

    async def update_weight(self, entry_id, weight):
        await self._fail("update_weight", entry_id, weight)

    async def delete_by_id(self, entry_id):
        await self._fail("delete_by_id", entry_id)

    async def delete_all(self):
        await self._fail("delete_all")

    async def count(self):
        await self._fail("count")


@pytest.fixture
def handlers(db_manager):
    return WeightHandlers(db_manager)


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def failing_handlers(db_manager, failing_store):
    return WeightHandlers(db_manager, store_factory=lambda db: failing_store)


@pytest.fixture
def driver_failing_handlers(db_manager):
    """Store raising a raw driver error, mapped by the session manager."""
    store = FailingStore(
        exc=OperationalError("UPDATE weights", {}, Exception("database is locked")),
    )
    return WeightHandlers(db_manager, store_factory=lambda db: store)


@pytest.fixture
def test_app(db_manager):
    return create_app(
        Settings(static_dir="__no_static_dir__", log_format="text"),
        db_manager=db_manager,
    )


@pytest.fixture
async def client(test_app):
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def failing_client(test_app, failing_handlers):
    test_app.dependency_overrides[get_weight_handlers] = lambda: failing_handlers
    async with AsyncClient(
        transport=ASGITransport(app=test_app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    test_app.dependency_overrides.clear()


@pytest.fixture
async def crashing_client(test_app, db_manager):
    """Client whose store raises an exception outside the error taxonomy."""
    store = FailingStore(exc=RuntimeError("secret internals"))
    test_app.dependency_overrides[get_weight_handlers] = (
        lambda: WeightHandlers(db_manager, store_factory=lambda db: store)
    )
    async with AsyncClient(
        transport=ASGITransport(app=test_app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    test_app.dependency_overrides.clear()
