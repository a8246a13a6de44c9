"""Infrastructure Layer: database pool, metrics registry, and logging setup.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Store failures are mapped to core/errors.py types before leaving this layer
"""
