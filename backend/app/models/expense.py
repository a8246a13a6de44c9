"""Expense ORM: one stored spending event.

Invariants:
    - id is store-assigned (autoincrement), unique and monotonic
    - Rows are inserted only; the API never updates or deletes them

Design Decisions:
    - Numeric(12, 2) for amount: money is never stored as float
    - No created_at column: the table is assumed pre-provisioned with exactly these columns
"""

import datetime
from decimal import Decimal

from sqlalchemy import Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
