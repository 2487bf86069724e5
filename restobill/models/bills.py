# restobill/models/bills.py

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class BillKind(str, Enum):
    CASH = "CASH"
    CREDIT = "CREDIT"


class CashSale(BaseModel):
    kind: Literal[BillKind.CASH] = BillKind.CASH


class CreditSale(BaseModel):
    kind: Literal[BillKind.CREDIT] = BillKind.CREDIT
    customer_id: int


# Storage keeps "row in credit_bills or not"; callers get the tag.
SaleKind = Annotated[Union[CashSale, CreditSale], Field(discriminator="kind")]


def sale_kind_for(customer_id: Optional[int]) -> Union[CashSale, CreditSale]:
    if customer_id is None:
        return CashSale()
    return CreditSale(customer_id=customer_id)


class CartLine(BaseModel):
    """
    One cart entry. Range checks (quantity >= 1, rate >= 0) are done by the
    billing engine so they surface as ledger ValidationErrors.
    """
    item_id: int
    quantity: int
    rate: Decimal


class BillIn(BaseModel):
    items: List[CartLine]
    total_amount: Optional[Decimal] = None
    credit_customer_id: Optional[int] = None


class BillSaved(BaseModel):
    id: int
    created_at: datetime
    total_amount: Decimal
    sale: SaleKind


class BillOut(BaseModel):
    id: int
    created_at: datetime
    total_amount: Decimal


class BillLineOut(BaseModel):
    item_id: int
    name_local: str
    name_common: str
    quantity: int
    rate: Decimal
    amount: Decimal


class BillDetail(BaseModel):
    id: int
    created_at: datetime
    total_amount: Decimal
    sale: SaleKind
    customer_name: Optional[str] = None
    lines: List[BillLineOut]


class DayBillOut(BaseModel):
    id: int
    created_at: datetime
    time: str
    total_amount: Decimal
    bill_type: BillKind
    customer_name: Optional[str] = None
