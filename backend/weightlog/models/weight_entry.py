"""WeightEntry ORM — one body-weight measurement per calendar date.

Invariants:
    - id is an autoincrement integer primary key, never reused after delete
    - date is unique and non-nullable: the engine, not the caller, enforces one
      entry per day
    - weight is non-nullable and CHECK-constrained to be positive
    - created_at is set once on insert and never written again

Design Decisions:
    - date stored as 10-char text (YYYY-MM-DD): ORDER BY date is chronological
    - sqlite_autoincrement: SQLite reuses the max rowid after deletes without it
    - created_at has both a Python default (Core/ORM inserts) and a server default
      (rows inserted outside the app, e.g. by hand or by migration)
"""

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, Float, Integer, String, UniqueConstraint, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from weightlog.db.base import Base


class WeightEntry(Base):
    """A single (date, weight) observation."""
    __tablename__ = "weights"
    __table_args__ = (
        UniqueConstraint("date", name="uq_weights_date"),
        CheckConstraint("weight > 0", name="ck_weights_weight_positive"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
