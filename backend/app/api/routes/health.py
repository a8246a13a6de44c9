"""Health & Liveness: process liveness, DB probe, and the simulated-failure switch.

Invariants:
    - GET /health always returns 200 {"status": "ok"}, whatever the store or liveness state
    - GET /db-health returns 200 db_up or 500 db_down (never 503: it reports, it does not gate)
    - GET /fail is the only writer of LivenessState; it only ever marks the app down

Design Decisions:
    - /health ignores LivenessState: the simulated failure is visible through app_up only
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

import app.infrastructure.database as database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "ok"}


@router.get("/db-health")
async def db_health_check():
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "db_down", "error": "Database is down"},
        )
    return {"status": "db_up"}


@router.get("/fail")
async def simulate_failure(request: Request):
    """Mark the app as down in the app_up gauge."""
    request.app.state.liveness.mark_down()
    logger.warning("Liveness marked down via /fail")
    return {"status": "app_down", "message": "The app is now marked as down"}
