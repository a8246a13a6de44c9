"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary, before any store access
    - Amounts travel as Decimal internally and serialize as JSON numbers

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
