# restobill/models/records.py

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel


class DayRecord(BaseModel):
    date: dt.date
    cash_sales: Decimal
    credit_sales: Decimal
    total_sales: Decimal
    bill_count: int
    total_expenses: Decimal
    profit: Decimal
