"""ORM Models: SQLAlchemy declarative models for the two store tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Expense and Salary are independent: no relationships between them

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before any create_all
"""

from app.models.expense import Expense  # noqa: F401
from app.models.salary import Salary, SALARY_ROW_ID  # noqa: F401
