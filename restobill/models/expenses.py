# restobill/models/expenses.py

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class ExpenseIn(BaseModel):
    description: str
    amount: Decimal
    expense_date: Optional[date] = None


class ExpenseOut(BaseModel):
    id: int
    expense_date: date
    description: str
    amount: Decimal
