"""Database Metadata: the declarative Base shared by every model.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here
"""
