# restobill/credit.py

"""
Credit customers and their payments.

A customer's balance is never stored; see restobill.aggregator. Payments
are append-only: there is no update or delete for them.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from restobill import clock
from restobill.db.engine import write_transaction
from restobill.db.schema import credit_bills, credit_customers, credit_payments
from restobill.errors import ReferenceNotFoundError, ValidationError
from restobill.models.credit import CustomerDeletedOut
from restobill.money import parse_money

logger = logging.getLogger(__name__)


def add_credit_customer(engine: Engine, name: str, phone: Optional[str] = None) -> int:
    name = (name or "").strip()
    if not name:
        raise ValidationError("customer name is required")
    phone = (phone or "").strip() or None

    with write_transaction(engine, "add credit customer") as conn:
        result = conn.execute(credit_customers.insert().values(name=name, phone=phone))
        customer_id = result.inserted_primary_key[0]

    logger.info("Credit customer %s added (%s)", customer_id, name)
    return customer_id


def delete_credit_customer(engine: Engine, customer_id: int) -> CustomerDeletedOut:
    """
    Hard-delete a customer together with their bill links and payments.

    The bills themselves stay, but without a credit_bills row they are
    reported as cash sales from then on.
    """
    with write_transaction(engine, "delete credit customer") as conn:
        exists = conn.execute(
            select(credit_customers.c.id).where(credit_customers.c.id == customer_id)
        ).first()
        if exists is None:
            raise ReferenceNotFoundError("credit customer", customer_id)

        links = conn.execute(
            credit_bills.delete().where(credit_bills.c.customer_id == customer_id)
        ).rowcount
        payments = conn.execute(
            credit_payments.delete().where(credit_payments.c.customer_id == customer_id)
        ).rowcount
        conn.execute(credit_customers.delete().where(credit_customers.c.id == customer_id))

    if links:
        logger.warning(
            "Credit customer %s deleted; %s bills now count as cash sales", customer_id, links
        )
    logger.info("Credit customer %s deleted with %s payments", customer_id, payments)

    return CustomerDeletedOut(id=customer_id, removed_bill_links=links, removed_payments=payments)


def add_credit_payment(
    engine: Engine,
    customer_id: int,
    amount: Decimal,
    payment_date: Optional[date] = None,
) -> int:
    """Record a payment against a customer's balance; date defaults to today."""
    amount = parse_money(amount, "payment amount")
    payment_date = payment_date or clock.local_today()

    with write_transaction(engine, "add credit payment") as conn:
        exists = conn.execute(
            select(func.count())
            .select_from(credit_customers)
            .where(credit_customers.c.id == customer_id)
        ).scalar_one()
        if not exists:
            raise ReferenceNotFoundError("credit customer", customer_id)

        result = conn.execute(
            credit_payments.insert().values(
                customer_id=customer_id, date=payment_date, amount=amount
            )
        )
        payment_id = result.inserted_primary_key[0]

    logger.info("Payment %s of %s from credit customer %s", payment_id, amount, customer_id)
    return payment_id
