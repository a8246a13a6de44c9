"""Route Modules: one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Data-bearing routers carry the DB-health gate as a router dependency
"""
