"""Expense Schemas: Pydantic models with presence and type checks for the expenses API.

Invariants:
    - ExpenseCreate: description, amount, date, category all required
    - description/category: present and non-empty (no length or whitespace rules)
    - amount: finite number (numeric strings accepted)
    - date: ISO YYYY-MM-DD

Design Decisions:
    - amount validated numerically, same as salary (ADR: the unchecked amount was an oversight)
    - No length or range limits: over-long values reach the store and fail there (500)
"""

import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

Amount = Annotated[
    Decimal,
    Field(allow_inf_nan=False),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class ExpenseCreate(BaseModel):
    """Expense creation payload."""
    description: str = Field(min_length=1)
    amount: Amount
    date: datetime.date
    category: str = Field(min_length=1)


class ExpenseResponse(BaseModel):
    """Stored expense as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    amount: Amount
    date: datetime.date
    category: str
