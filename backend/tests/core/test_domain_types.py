"""Domain Types — verifies rich type definitions and the upsert result."""

from weightlog.core.domain_types import (
    EntryDate, EntryId, UpsertOutcome, UpsertResult, Weight,
)


def test_identity_and_value_types_wrap_primitives():
    assert EntryId(3) == 3
    assert EntryDate("2024-01-01") == "2024-01-01"
    assert Weight(75.5) == 75.5


def test_upsert_outcome_has_two_states():
    assert {o.value for o in UpsertOutcome} == {"inserted", "updated"}


def test_upsert_result_inserted_flag():
    assert UpsertResult(UpsertOutcome.INSERTED, EntryId(1)).inserted is True
    assert UpsertResult(UpsertOutcome.UPDATED, EntryId(1)).inserted is False
