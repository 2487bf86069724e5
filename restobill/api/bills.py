# restobill/api/bills.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.engine import Engine

from restobill import billing
from restobill.db.engine import get_engine
from restobill.errors import ReferenceNotFoundError
from restobill.models.bills import BillDetail, BillIn, BillLineOut, BillOut, BillSaved

router = APIRouter(prefix="/bills", tags=["bills"])


def _saved(engine: Engine, bill_id: int) -> BillSaved:
    bill = billing.get_bill(engine, bill_id)
    if bill is None:
        raise ReferenceNotFoundError("bill", bill_id)
    return BillSaved(
        id=bill.id,
        created_at=bill.created_at,
        total_amount=bill.total_amount,
        sale=bill.sale,
    )


@router.post("/", response_model=BillSaved, status_code=201)
def create_bill(bill: BillIn, engine: Engine = Depends(get_engine)) -> BillSaved:
    """
    Save a cart as a bill. `total_amount`, when sent, must match the sum of
    rate * quantity over the lines.
    """
    bill_id = billing.create_bill(
        engine,
        bill.items,
        credit_customer_id=bill.credit_customer_id,
        expected_total=bill.total_amount,
    )
    return _saved(engine, bill_id)


@router.get("/", response_model=List[BillOut])
def get_bill_history(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    engine: Engine = Depends(get_engine),
) -> List[BillOut]:
    return billing.get_bill_history(engine, limit)


@router.get("/{bill_id}", response_model=BillDetail)
def get_bill(bill_id: int, engine: Engine = Depends(get_engine)) -> BillDetail:
    bill = billing.get_bill(engine, bill_id)
    if bill is None:
        raise ReferenceNotFoundError("bill", bill_id)
    return bill


@router.put("/{bill_id}", response_model=BillSaved)
def update_bill(bill_id: int, bill: BillIn, engine: Engine = Depends(get_engine)) -> BillSaved:
    """Edit-and-reprint. Keeps the bill id and its original timestamp."""
    billing.update_bill(
        engine,
        bill_id,
        bill.items,
        credit_customer_id=bill.credit_customer_id,
        expected_total=bill.total_amount,
    )
    return _saved(engine, bill_id)


@router.get("/{bill_id}/items", response_model=List[BillLineOut])
def get_bill_items(bill_id: int, engine: Engine = Depends(get_engine)) -> List[BillLineOut]:
    return billing.get_bill_items(engine, bill_id)
