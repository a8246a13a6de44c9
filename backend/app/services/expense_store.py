"""Expense Store: the four store operations behind the expenses and salary routes.

Invariants:
    - Each operation is a single statement committed on its own (no multi-statement transactions)
    - Salary replace is one atomic upsert keyed on SALARY_ROW_ID (never more than one row)
    - Writes echo the stored value (refresh or re-select), so POST and GET agree on rounding
    - SQLAlchemy failures are logged with detail and re-raised as DatabaseError carrying
      only a generic client message

Design Decisions:
    - Upsert built per dialect (MySQL ON DUPLICATE KEY, SQLite/PostgreSQL ON CONFLICT):
      a select-then-write merge would be two statements and race under concurrent writers
    - Expenses listed in id order: insertion order is the only ordering the store implies
"""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DatabaseError
from app.models.expense import Expense
from app.models.salary import Salary, SALARY_ROW_ID
from app.schemas.expense import ExpenseCreate

logger = logging.getLogger(__name__)


def _store_error(exc: SQLAlchemyError, message: str, operation: str) -> DatabaseError:
    logger.error(
        f"{message}: {exc}", extra={"operation": operation, "error_code": "DATABASE_ERROR"},
    )
    return DatabaseError(message, operation)


async def list_expenses(db: AsyncSession) -> list[Expense]:
    try:
        result = await db.execute(select(Expense).order_by(Expense.id))
        return list(result.scalars().all())
    except SQLAlchemyError as e:
        await db.rollback()
        raise _store_error(e, "Failed to fetch expenses", "list_expenses") from e


async def add_expense(db: AsyncSession, data: ExpenseCreate) -> Expense:
    expense = Expense(**data.model_dump())
    try:
        db.add(expense)
        await db.commit()
        await db.refresh(expense)
    except SQLAlchemyError as e:
        await db.rollback()
        raise _store_error(e, "Failed to add expense", "add_expense") from e
    logger.info(f"Expense {expense.id} recorded", extra={"operation": "add_expense"})
    return expense


async def get_salary(db: AsyncSession) -> Decimal:
    """Current salary, or 0 when the row has never been written."""
    try:
        result = await db.execute(
            select(Salary.amount).where(Salary.id == SALARY_ROW_ID),
        )
        amount = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        await db.rollback()
        raise _store_error(e, "Failed to fetch salary", "get_salary") from e
    return amount if amount is not None else Decimal(0)


def _replace_salary_statement(dialect_name: str, amount: Decimal):
    values = {"id": SALARY_ROW_ID, "amount": amount}
    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql.insert(Salary).values(**values)
        return stmt.on_duplicate_key_update(amount=stmt.inserted.amount)
    if dialect_name == "postgresql":
        stmt = postgresql.insert(Salary).values(**values)
    elif dialect_name == "sqlite":
        stmt = sqlite.insert(Salary).values(**values)
    else:
        raise ValueError(f"Unsupported dialect for salary upsert: {dialect_name}")
    return stmt.on_conflict_do_update(
        index_elements=[Salary.id], set_={"amount": stmt.excluded.amount},
    )


async def replace_salary(db: AsyncSession, amount: Decimal) -> Decimal:
    """Upsert the salary row and return the value as stored (column scale applied)."""
    stmt = _replace_salary_statement(db.get_bind().dialect.name, amount)
    try:
        await db.execute(stmt)
        await db.commit()
        stored = await db.execute(
            select(Salary.amount).where(Salary.id == SALARY_ROW_ID),
        )
        amount = stored.scalar_one()
    except SQLAlchemyError as e:
        await db.rollback()
        raise _store_error(e, "Failed to update salary", "replace_salary") from e
    logger.info("Salary replaced", extra={"operation": "replace_salary"})
    return amount
