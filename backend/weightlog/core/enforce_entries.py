"""Entry Input Enforcement — pure checks for weight, date and id values.

Invariants:
    - Every check is PURE: returns an error message or None, never raises
    - Shell decides how to surface a message (Pydantic ValueError at the HTTP
      boundary, EntryValidationError inside handlers and the repository)
    - bool is rejected wherever a number is expected (True is an int in Python)

Design Decisions:
    - One module for all three fields: the checks are shared by schemas,
      handlers and repository, so there is a single source of truth for wording
"""

import math
import re
from datetime import date

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# SQLite INTEGER is signed 64-bit; larger ints overflow in the driver
MIN_ENTRY_ID = -(2**63)
MAX_ENTRY_ID = 2**63 - 1


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_weight(value: object) -> str | None:
    """Weight must be a finite number greater than zero."""
    if not _is_number(value) or math.isnan(value):
        return "Weight must be a valid number"
    if math.isinf(value):
        return "Weight must be a finite number"
    if value <= 0:
        return "Weight must be greater than zero"
    return None


def validate_entry_date(value: object) -> str | None:
    """Date must be a non-empty YYYY-MM-DD string naming a real calendar day."""
    if value is None or value == "":
        return "Date is required"
    if not isinstance(value, str):
        return "Date must be a string"
    if not DATE_PATTERN.match(value):
        return "Date must be in YYYY-MM-DD format"
    try:
        date.fromisoformat(value)
    except ValueError:
        return f"Date '{value}' is not a valid calendar day"
    return None


def validate_entry_id(value: object) -> str | None:
    """Entry id must be an integer the database can store."""
    if not isinstance(value, int) or isinstance(value, bool):
        return "ID must be a valid number"
    if not MIN_ENTRY_ID <= value <= MAX_ENTRY_ID:
        return "ID must be a valid number"
    return None
