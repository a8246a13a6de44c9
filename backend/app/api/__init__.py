"""API Layer: FastAPI routes, dependencies, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON, except the metrics scrape

Design Decisions:
    - Thin routes delegate to services/expense_store.py
"""
