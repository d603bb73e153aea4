"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services or api
    - All SQLAlchemy exceptions are mapped to DatabaseError before leaving this layer
"""
