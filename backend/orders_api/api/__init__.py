"""API Layer: FastAPI routes, dependency wiring and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes hold no business logic; managers raise, handlers translate
"""
