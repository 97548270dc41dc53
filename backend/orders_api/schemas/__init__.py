"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; business rules live in core/
    - Wire names are camelCase; snake_case is accepted on input

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
