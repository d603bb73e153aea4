"""Entry Enforcement — tests for the pure weight, date and id checks.

Tests cover:
    - validate_weight accepts positive finite ints and floats
    - validate_weight rejects NaN, infinities, zero, negatives, strings, bools
    - validate_entry_date requires a real YYYY-MM-DD day
    - validate_entry_id accepts ints only
"""

import math

import pytest

from weightlog.core.enforce_entries import (
    validate_entry_date,
    validate_entry_id,
    validate_weight,
)


# ─── validate_weight ─────────────────────────────────────────────

@pytest.mark.parametrize("value", [75.5, 80, 0.1])
def test_validate_weight_accepts_positive_numbers(value):
    assert validate_weight(value) is None


def test_validate_weight_rejects_nan():
    assert validate_weight(math.nan) == "Weight must be a valid number"


@pytest.mark.parametrize("value", [math.inf, -math.inf])
def test_validate_weight_rejects_infinity(value):
    assert validate_weight(value) == "Weight must be a finite number"


@pytest.mark.parametrize("value", [0, 0.0, -3.2])
def test_validate_weight_rejects_non_positive(value):
    assert validate_weight(value) == "Weight must be greater than zero"


@pytest.mark.parametrize("value", ["75.5", None, True, [75.5]])
def test_validate_weight_rejects_non_numbers(value):
    assert validate_weight(value) == "Weight must be a valid number"


# ─── validate_entry_date ─────────────────────────────────────────

def test_validate_entry_date_accepts_iso_day():
    assert validate_entry_date("2024-01-01") is None


def test_validate_entry_date_accepts_leap_day():
    assert validate_entry_date("2024-02-29") is None


@pytest.mark.parametrize("value", [None, ""])
def test_validate_entry_date_requires_value(value):
    assert validate_entry_date(value) == "Date is required"


def test_validate_entry_date_rejects_non_string():
    assert validate_entry_date(20240101) == "Date must be a string"


@pytest.mark.parametrize("value", ["2024-1-1", "01/01/2024", "2024-01-01T10:00"])
def test_validate_entry_date_rejects_other_formats(value):
    assert validate_entry_date(value) == "Date must be in YYYY-MM-DD format"


def test_validate_entry_date_rejects_impossible_day():
    assert "not a valid calendar day" in validate_entry_date("2023-02-29")


# ─── validate_entry_id ───────────────────────────────────────────

def test_validate_entry_id_accepts_int():
    assert validate_entry_id(7) is None


@pytest.mark.parametrize("value", ["7", 7.0, None, False])
def test_validate_entry_id_rejects_non_ints(value):
    assert validate_entry_id(value) == "ID must be a valid number"


@pytest.mark.parametrize("value", [2**70, 2**63, -(2**63) - 1])
def test_validate_entry_id_rejects_out_of_range(value):
    assert validate_entry_id(value) == "ID must be a valid number"


@pytest.mark.parametrize("value", [2**63 - 1, -(2**63)])
def test_validate_entry_id_accepts_64_bit_bounds(value):
    assert validate_entry_id(value) is None
