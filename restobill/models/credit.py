# restobill/models/credit.py

import datetime as dt
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class CreditCustomerIn(BaseModel):
    name: str
    phone: Optional[str] = None


class PaymentIn(BaseModel):
    amount: Decimal
    date: Optional[dt.date] = None


class CustomerSummaryOut(BaseModel):
    id: int
    name: str
    phone: Optional[str] = None
    total_credit: Decimal
    total_paid: Decimal
    balance: Decimal


class CustomerBillOut(BaseModel):
    id: int
    created_at: dt.datetime
    date: dt.date
    time: str
    total_amount: Decimal


class PaymentOut(BaseModel):
    id: int
    date: dt.date
    amount: Decimal


class CustomerDetailOut(CustomerSummaryOut):
    bills: List[CustomerBillOut]
    payments: List[PaymentOut]


class CustomerDeletedOut(BaseModel):
    id: int
    removed_bill_links: int
    removed_payments: int
