"""Expenses Routes: list and create expense entries.

Invariants:
    - DB-health gate runs before every handler in this router
    - Payload validated by ExpenseCreate before any store write
    - Store failures surface as 500 {"error": "<generic message>"}
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import require_database
from app.infrastructure.database import get_db
from app.schemas.expense import ExpenseCreate, ExpenseResponse
from app.services import expense_store

router = APIRouter(
    prefix="/expenses", tags=["expenses"],
    dependencies=[Depends(require_database)],
)


@router.get("", response_model=list[ExpenseResponse])
async def list_expenses(db: AsyncSession = Depends(get_db)):
    return await expense_store.list_expenses(db)


@router.post(
    "", response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    body: ExpenseCreate, db: AsyncSession = Depends(get_db),
):
    """Record one expense and echo it back with its assigned id."""
    return await expense_store.add_expense(db, body)
