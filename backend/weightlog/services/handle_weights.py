"""Weight Handlers — list, create, update, delete and delete-all for weight entries.

Invariants:
    - Validation fully precedes storage: a rejected input never opens a session
    - Each storage call runs in its own session and is one atomic step
    - Zero rows changed on update/delete-one becomes ResourceNotFoundError
    - Storage failures are logged with detail, then re-raised as InternalError
      with a generic per-operation message
    - A repeated date on create is an update, never an error

Design Decisions:
    - Handlers receive the DatabaseSessionManager (not a session): the manager is
      the process-wide storage handle, sessions are per operation
    - store_factory injectable: tests swap in a failing store without a database
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from weightlog.core.domain_types import EntryId
from weightlog.core.enforce_entries import (
    validate_entry_date, validate_entry_id, validate_weight,
)
from weightlog.core.errors import (
    EntryValidationError, ErrorContext, InternalError, ResourceNotFoundError,
)
from weightlog.core.repository_protocols import WeightStore
from weightlog.infrastructure.database import DatabaseSessionManager
from weightlog.infrastructure.weight_repository import WeightRepository

logger = logging.getLogger(__name__)


def _require(error: str | None, field: str) -> None:
    if error:
        raise EntryValidationError(error, field)


def _as_utc(moment: datetime) -> datetime:
    """SQLite hands timestamps back naive; they were written in UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class WeightHandlers:
    """Request handler layer over the weight store."""

    def __init__(
        self,
        db_manager: DatabaseSessionManager,
        store_factory: Callable[[AsyncSession], WeightStore] = WeightRepository,
    ):
        self.db_manager = db_manager
        self.store_factory = store_factory

    @asynccontextmanager
    async def _storage(
        self, operation: str, failure_message: str,
    ) -> AsyncGenerator[WeightStore, None]:
        try:
            async with self.db_manager.session() as db:
                yield self.store_factory(db)
        except InternalError as e:
            logger.error(
                f"{failure_message}: {e.message}",
                extra={"operation": operation, "error_code": e.code},
            )
            raise InternalError(failure_message, operation) from e

    async def list_entries(self) -> list[dict]:
        """All entries ascending by date."""
        async with self._storage("list", "Failed to fetch weights") as store:
            entries = await store.list_all()
        return [
            {"id": e.id, "weight": e.weight, "date": e.date} for e in entries
        ]

    async def latest_entry(self) -> dict:
        """Entry with the most recent date."""
        async with self._storage("latest", "Failed to fetch latest weight") as store:
            entry = await store.latest()
        if entry is None:
            raise ResourceNotFoundError("Weight entry", "latest")
        return {
            "id": entry.id,
            "weight": entry.weight,
            "date": entry.date,
            "created_at": _as_utc(entry.created_at).isoformat(),
        }

    async def create_entry(self, weight: object, entry_date: object) -> dict:
        """Record weight for a date; an existing date has its weight replaced."""
        _require(validate_weight(weight), "weight")
        _require(validate_entry_date(entry_date), "date")
        async with self._storage("create", "Failed to add weight") as store:
            result = await store.upsert(weight, entry_date)
        if result.inserted:
            return {"success": True, "id": result.entry_id}
        return {"success": True, "updated": True, "id": result.entry_id}

    async def update_entry(self, entry_id: object, weight: object) -> dict:
        """Change the weight of an existing entry."""
        _require(validate_entry_id(entry_id), "id")
        _require(validate_weight(weight), "weight")
        async with self._storage("update", "Failed to update weight") as store:
            changed = await store.update_weight(EntryId(entry_id), weight)
        if changed == 0:
            raise ResourceNotFoundError(
                "Weight entry", str(entry_id), ErrorContext(entry_id=entry_id),
            )
        return {"success": True}

    async def delete_entry(self, entry_id: object) -> dict:
        """Delete one entry by id."""
        _require(validate_entry_id(entry_id), "id")
        async with self._storage("delete", "Failed to delete weight") as store:
            changed = await store.delete_by_id(EntryId(entry_id))
        if changed == 0:
            raise ResourceNotFoundError(
                "Weight entry", str(entry_id), ErrorContext(entry_id=entry_id),
            )
        return {"success": True, "deleted": changed}

    async def delete_all_entries(self) -> dict:
        """Clear the whole series. An empty series is not an error."""
        async with self._storage("delete_all", "Failed to delete weights") as store:
            changed = await store.delete_all()
        logger.info(
            f"Deleted {changed} weight entries", extra={"operation": "delete_all"},
        )
        return {"success": True, "deleted": changed}

    async def count_entries(self) -> int:
        async with self._storage("count", "Failed to count weights") as store:
            return await store.count()
