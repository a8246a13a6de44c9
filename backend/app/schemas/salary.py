"""Salary Schemas: the singleton income value.

Invariants:
    - SalaryUpdate.amount is required and must parse as a finite number
"""

from pydantic import BaseModel

from app.schemas.expense import Amount


class SalaryUpdate(BaseModel):
    amount: Amount


class SalaryResponse(BaseModel):
    amount: Amount
