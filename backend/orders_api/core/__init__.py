"""Core Layer: pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Rule violations are raised as typed errors from core/errors.py
"""
