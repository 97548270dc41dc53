"""Infrastructure Layer: database sessions, SQL stores and logging setup.

Invariants:
    - The only layer that imports SQLAlchemy sessions or ORM models at runtime
"""
