"""Database Package — declarative Base shared by ORM models and Alembic."""
