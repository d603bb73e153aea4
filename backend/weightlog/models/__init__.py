"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete for create_all
      and Alembic autogenerate
"""

from weightlog.models.weight_entry import WeightEntry  # noqa: F401
