"""Route Dependencies: the DB-health gate run in front of every data-bearing route.

Invariants:
    - The probe runs before the handler; on failure the handler never executes
    - Probe failure surfaces as DatabaseUnavailableError (503), never 500

Design Decisions:
    - db_manager read through the module at call time, not imported by name: it is
      assigned in the lifespan (and swapped by test fixtures) after this module loads
    - Two store round trips per data request (probe + query): fail fast over latency
"""

import logging

import app.infrastructure.database as database
from app.core.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)


async def require_database() -> None:
    """Short-circuit with 503 when the store does not answer SELECT 1."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        logger.warning("DB-health gate closed", extra={"error_code": "DATABASE_UNAVAILABLE"})
        raise DatabaseUnavailableError()
