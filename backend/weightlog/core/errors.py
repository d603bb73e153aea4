"""Error Hierarchy — typed, categorized exceptions for all weight log failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation and not-found errors are 400-level; storage failures are 500-level
    - to_response() produces the REST envelope used by every error handler
    - InternalError messages are generic: driver/SQL detail goes to logs only

Design Decisions:
    - Single hierarchy with WeightLogError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - DatabaseError subclasses InternalError: handlers can catch one type for
      "storage failed" regardless of which layer raised it
    - Duplicate dates are NOT an error type — the repository resolves them as updates
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entry_id: int | None = None
    entry_date: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class WeightLogError(Exception):
    """Base exception for all weight log errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entry_id": self.context.entry_id,
                    "entry_date": self.context.entry_date,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class EntryValidationError(WeightLogError):
    """Operation input is missing or malformed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(WeightLogError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InternalError(WeightLogError):
    """Storage-layer failure reported with a generic message."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, code, category, ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}", operation, context,
            code="DATABASE_ERROR", category=ErrorCategory.DATABASE,
        )
