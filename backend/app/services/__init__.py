"""Services Layer: store operations called by the route handlers.

Invariants:
    - Services take an AsyncSession and never touch the request or response
    - Store failures leave this layer only as DatabaseError
"""
