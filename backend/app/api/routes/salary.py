"""Salary Routes: read and replace the singleton salary value.

Invariants:
    - DB-health gate runs before every handler in this router
    - GET returns a bare JSON number, 0 when no salary has been set
    - POST replaces the single row wholesale (last writer wins) and echoes the stored,
      column-rounded amount, as POST /expenses does
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import require_database
from app.infrastructure.database import get_db
from app.schemas.salary import SalaryResponse, SalaryUpdate
from app.services import expense_store

router = APIRouter(
    prefix="/salary", tags=["salary"],
    dependencies=[Depends(require_database)],
)


@router.get("")
async def get_salary(db: AsyncSession = Depends(get_db)) -> float:
    amount = await expense_store.get_salary(db)
    return float(amount)


@router.post(
    "", response_model=SalaryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def set_salary(body: SalaryUpdate, db: AsyncSession = Depends(get_db)):
    amount = await expense_store.replace_salary(db, body.amount)
    return SalaryResponse(amount=amount)
