"""Salary ORM: the singleton row holding current income.

Invariants:
    - At most one row, always id == SALARY_ROW_ID
    - Replaced wholesale by an upsert keyed on the fixed id (last writer wins)
"""

from decimal import Decimal

from sqlalchemy import Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

SALARY_ROW_ID = 1


class Salary(Base):
    __tablename__ = "salary"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False, default=SALARY_ROW_ID,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
