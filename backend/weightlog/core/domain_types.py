"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EntryId wraps the engine-assigned integer key — never a caller-chosen value
    - EntryDate is always an ISO 8601 calendar day string (YYYY-MM-DD)
    - UpsertResult always carries the id of the row that now holds the date

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for UpsertOutcome: serializes to JSON without custom encoders
    - Dates kept as text, not datetime.date: lexicographic order of YYYY-MM-DD
      equals chronological order, so ORDER BY on the column is the sort
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntryId = NewType("EntryId", int)


# ─── Value Types ─────────────────────────────────────────────────

EntryDate = NewType("EntryDate", str)   # YYYY-MM-DD
Weight = NewType("Weight", float)       # finite, > 0


# ─── Outcomes ────────────────────────────────────────────────────

class UpsertOutcome(str, Enum):
    """What an upsert did to the table."""
    INSERTED = "inserted"
    UPDATED = "updated"


@dataclass(frozen=True)
class UpsertResult:
    """Result of an atomic insert-or-update keyed on date."""
    outcome: UpsertOutcome
    entry_id: EntryId

    @property
    def inserted(self) -> bool:
        return self.outcome is UpsertOutcome.INSERTED
