# restobill/api/credit.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.engine import Engine

from restobill import aggregator, credit
from restobill.db.engine import get_engine
from restobill.errors import ReferenceNotFoundError
from restobill.models.credit import (
    CreditCustomerIn,
    CustomerDeletedOut,
    CustomerDetailOut,
    CustomerSummaryOut,
    PaymentIn,
)
from restobill.models.items import Created

router = APIRouter(prefix="/credit-customers", tags=["credit"])


@router.get("/", response_model=List[CustomerSummaryOut])
def get_all_credit_customers(engine: Engine = Depends(get_engine)) -> List[CustomerSummaryOut]:
    """
    All credit customers with total billed, total paid and balance.
    """
    return aggregator.customer_summary(engine)


@router.post("/", response_model=Created, status_code=201)
def add_credit_customer(customer: CreditCustomerIn, engine: Engine = Depends(get_engine)) -> Created:
    return Created(id=credit.add_credit_customer(engine, customer.name, customer.phone))


@router.get("/{customer_id}", response_model=CustomerDetailOut)
def get_credit_customer_details(
    customer_id: int,
    engine: Engine = Depends(get_engine),
) -> CustomerDetailOut:
    detail = aggregator.customer_detail(engine, customer_id)
    if detail is None:
        raise ReferenceNotFoundError("credit customer", customer_id)
    return detail


@router.delete("/{customer_id}", response_model=CustomerDeletedOut)
def delete_credit_customer(
    customer_id: int,
    engine: Engine = Depends(get_engine),
) -> CustomerDeletedOut:
    """
    Removes the customer, their payments and their bill links. The bills
    remain and are reported as cash sales afterwards.
    """
    return credit.delete_credit_customer(engine, customer_id)


@router.post("/{customer_id}/payments", response_model=Created, status_code=201)
def add_credit_payment(
    customer_id: int,
    payment: PaymentIn,
    engine: Engine = Depends(get_engine),
) -> Created:
    payment_id = credit.add_credit_payment(engine, customer_id, payment.amount, payment.date)
    return Created(id=payment_id)
