"""Boundary Protocols — contracts between the handler layer and storage.

Invariants:
    - Handlers depend on WeightStore, never on a concrete repository class
    - Every mutating method reports the number of rows it changed (0 or more)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; handlers await them
"""

from datetime import datetime
from typing import Protocol, Sequence

from weightlog.core.domain_types import EntryDate, EntryId, UpsertResult, Weight


class WeightEntryLike(Protocol):
    """Structural contract for persisted entries returned by a store."""
    id: int
    weight: float
    date: str
    created_at: datetime


class WeightStore(Protocol):
    """Contract for weight entry persistence — implemented by infrastructure."""
    async def upsert(self, weight: Weight, entry_date: EntryDate) -> UpsertResult: ...
    async def list_all(self) -> Sequence[WeightEntryLike]: ...
    async def latest(self) -> WeightEntryLike | None: ...
    async def update_weight(self, entry_id: EntryId, weight: Weight) -> int: ...
    async def delete_by_id(self, entry_id: EntryId) -> int: ...
    async def delete_all(self) -> int: ...
    async def count(self) -> int: ...
