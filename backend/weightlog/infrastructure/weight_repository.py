"""Weight Repository — atomic CRUD over the weights table.

Invariants:
    - At most one row per date: upsert never inserts a second row for a date
    - upsert is one transaction: update-by-date, else insert-or-nothing, else
      update again (a concurrent writer won the insert); no IntegrityError is
      used for control flow
    - Weight is checked (finite, > 0) before any SQL is issued
    - Mutations report rows changed; 0 is a valid, non-error result
    - list_all and latest query the table on every call (no caching)

Design Decisions:
    - Update-first ordering: re-writing an existing day never touches the id
      sequence, so ids only grow when a new day is actually inserted
    - Dialect insert (sqlite/postgresql) for ON CONFLICT DO NOTHING RETURNING:
      both back ends support it natively and report "no row" on conflict
    - Last writer wins: a second upsert for the same date overwrites the weight
"""

import logging
from typing import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from weightlog.core.domain_types import (
    EntryId, UpsertOutcome, UpsertResult,
)
from weightlog.core.enforce_entries import validate_entry_date, validate_weight
from weightlog.core.errors import (
    DatabaseError, EntryValidationError, ErrorContext,
)
from weightlog.models.weight_entry import WeightEntry

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}

# update / insert rounds before giving up; each lost round means a concurrent
# insert or delete landed on the same date between our two statements
UPSERT_ATTEMPTS = 3


def _check_weight(weight: object) -> None:
    error = validate_weight(weight)
    if error:
        raise EntryValidationError(error, "weight")


class WeightRepository:
    """Storage engine for weight entries, bound to one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect]
        except KeyError:
            raise DatabaseError(
                f"Unsupported database dialect '{dialect}'", "upsert",
            ) from None

    async def upsert(self, weight: float, entry_date: str) -> UpsertResult:
        """Insert a new entry for entry_date, or overwrite that day's weight."""
        _check_weight(weight)
        date_error = validate_entry_date(entry_date)
        if date_error:
            raise EntryValidationError(date_error, "date")

        insert = self._insert()
        for _ in range(UPSERT_ATTEMPTS):
            updated = await self.db.execute(
                update(WeightEntry)
                .where(WeightEntry.date == entry_date)
                .values(weight=weight)
                .returning(WeightEntry.id)
                .execution_options(synchronize_session=False),
            )
            entry_id = updated.scalar_one_or_none()
            if entry_id is not None:
                await self.db.commit()
                return self._result(UpsertOutcome.UPDATED, entry_id, entry_date)

            inserted = await self.db.execute(
                insert(WeightEntry)
                .values(weight=weight, date=entry_date)
                .on_conflict_do_nothing(index_elements=["date"])
                .returning(WeightEntry.id),
            )
            entry_id = inserted.scalar_one_or_none()
            if entry_id is not None:
                await self.db.commit()
                return self._result(UpsertOutcome.INSERTED, entry_id, entry_date)

        await self.db.rollback()
        raise DatabaseError(
            "Concurrent writes kept changing the entry",
            "upsert",
            ErrorContext(entry_date=entry_date),
        )

    @staticmethod
    def _result(
        outcome: UpsertOutcome, entry_id: int, entry_date: str,
    ) -> UpsertResult:
        logger.info(
            f"Weight entry {outcome.value}",
            extra={
                "entry_id": entry_id,
                "entry_date": entry_date,
                "outcome": outcome.value,
            },
        )
        return UpsertResult(outcome=outcome, entry_id=EntryId(entry_id))

    async def list_all(self) -> Sequence[WeightEntry]:
        """All entries, ascending by date."""
        result = await self.db.execute(
            select(WeightEntry).order_by(WeightEntry.date.asc()),
        )
        return result.scalars().all()

    async def latest(self) -> WeightEntry | None:
        """Entry with the greatest date, or None when the table is empty."""
        result = await self.db.execute(
            select(WeightEntry).order_by(WeightEntry.date.desc()).limit(1),
        )
        return result.scalar_one_or_none()

    async def update_weight(self, entry_id: EntryId, weight: float) -> int:
        """Set the weight of an existing entry. Never creates one."""
        _check_weight(weight)
        result = await self.db.execute(
            update(WeightEntry)
            .where(WeightEntry.id == entry_id)
            .values(weight=weight)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        return result.rowcount

    async def delete_by_id(self, entry_id: EntryId) -> int:
        result = await self.db.execute(
            delete(WeightEntry)
            .where(WeightEntry.id == entry_id)
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        return result.rowcount

    async def delete_all(self) -> int:
        result = await self.db.execute(
            delete(WeightEntry).execution_options(synchronize_session=False),
        )
        await self.db.commit()
        return result.rowcount

    async def count(self) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(WeightEntry),
        )
        return result.scalar_one()
