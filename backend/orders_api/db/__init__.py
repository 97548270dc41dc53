"""Database Package: SQLAlchemy declarative base.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here
"""
