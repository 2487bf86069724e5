# restobill/aggregator.py

"""
Read-side views over the ledger: daily sales/expense/profit records,
per-day drill-downs and credit-customer balances.

Nothing here is stored. Cash vs. credit is decided by whether a bill has a
credit_bills row, and a customer's balance is always
sum(linked bill totals) - sum(payments).
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.engine import Connection, Engine

from restobill.db.engine import read_connection
from restobill.db.schema import bills, credit_bills, credit_customers, credit_payments, expenses
from restobill.expenses import check_date_range, get_expenses_by_date
from restobill.models.bills import BillKind, DayBillOut
from restobill.models.credit import (
    CustomerBillOut,
    CustomerDetailOut,
    CustomerSummaryOut,
    PaymentOut,
)
from restobill.models.expenses import ExpenseOut
from restobill.models.records import DayRecord

ZERO = Decimal("0")


def _day_bounds(start_date: date, end_date: date) -> Tuple[datetime, datetime]:
    """[start 00:00, day after end 00:00) in local wall-clock time."""
    return (
        datetime.combine(start_date, time.min),
        datetime.combine(end_date + timedelta(days=1), time.min),
    )


def _as_date(value) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _sales_by_day(conn: Connection, start_date: date, end_date: date) -> Dict[date, dict]:
    lower, upper = _day_bounds(start_date, end_date)
    day = func.date(bills.c.created_at)
    is_cash = credit_bills.c.customer_id.is_(None)
    is_credit = credit_bills.c.customer_id.is_not(None)

    stmt = (
        select(
            day.label("day"),
            func.coalesce(
                func.sum(case((is_cash, bills.c.total_amount), else_=0)), 0
            ).label("cash_sales"),
            func.coalesce(
                func.sum(case((is_credit, bills.c.total_amount), else_=0)), 0
            ).label("credit_sales"),
            func.count(bills.c.id).label("bill_count"),
        )
        .select_from(bills.outerjoin(credit_bills, bills.c.id == credit_bills.c.bill_id))
        .where(bills.c.created_at >= lower, bills.c.created_at < upper)
        .group_by(day)
    )

    sales = {}
    for row in conn.execute(stmt).mappings():
        sales[_as_date(row["day"])] = {
            "cash_sales": Decimal(row["cash_sales"] or ZERO),
            "credit_sales": Decimal(row["credit_sales"] or ZERO),
            "bill_count": row["bill_count"],
        }
    return sales


def _expenses_by_day(conn: Connection, start_date: date, end_date: date) -> Dict[date, Decimal]:
    stmt = (
        select(
            expenses.c.expense_date.label("day"),
            func.coalesce(func.sum(expenses.c.amount), 0).label("total_expenses"),
        )
        .where(expenses.c.expense_date >= start_date, expenses.c.expense_date <= end_date)
        .group_by(expenses.c.expense_date)
    )

    return {
        _as_date(row["day"]): Decimal(row["total_expenses"] or ZERO)
        for row in conn.execute(stmt).mappings()
    }


def daily_records(engine: Engine, start_date: date, end_date: date) -> List[DayRecord]:
    """
    One record per local date in [start_date, end_date] that has a bill or
    an expense, newest date first.

    Sales and expenses are aggregated separately and merged on date; a day
    with only expenses gets zero sales and a negative profit.
    """
    check_date_range(start_date, end_date)

    with read_connection(engine, "daily records") as conn:
        sales = _sales_by_day(conn, start_date, end_date)
        spent = _expenses_by_day(conn, start_date, end_date)

    records: List[DayRecord] = []
    for day in sorted(set(sales) | set(spent), reverse=True):
        day_sales = sales.get(day, {})
        cash_sales = day_sales.get("cash_sales", ZERO)
        credit_sales = day_sales.get("credit_sales", ZERO)
        total_sales = cash_sales + credit_sales
        total_expenses = spent.get(day, ZERO)

        records.append(
            DayRecord(
                date=day,
                cash_sales=cash_sales,
                credit_sales=credit_sales,
                total_sales=total_sales,
                bill_count=day_sales.get("bill_count", 0),
                total_expenses=total_expenses,
                profit=total_sales - total_expenses,
            )
        )

    return records


def bills_by_date(engine: Engine, day: date) -> List[DayBillOut]:
    """Bills of one local date, newest first, tagged CASH or CREDIT."""
    lower, upper = _day_bounds(day, day)

    stmt = (
        select(
            bills.c.id,
            bills.c.created_at,
            bills.c.total_amount,
            credit_bills.c.customer_id,
            credit_customers.c.name.label("customer_name"),
        )
        .select_from(
            bills.outerjoin(credit_bills, bills.c.id == credit_bills.c.bill_id)
            .outerjoin(credit_customers, credit_bills.c.customer_id == credit_customers.c.id)
        )
        .where(bills.c.created_at >= lower, bills.c.created_at < upper)
        .order_by(bills.c.created_at.desc(), bills.c.id.desc())
    )

    with read_connection(engine, "bills by date") as conn:
        rows = conn.execute(stmt).mappings().all()

    return [
        DayBillOut(
            id=row["id"],
            created_at=row["created_at"],
            time=row["created_at"].strftime("%H:%M:%S"),
            total_amount=row["total_amount"],
            bill_type=BillKind.CASH if row["customer_id"] is None else BillKind.CREDIT,
            customer_name=row["customer_name"],
        )
        for row in rows
    ]


def expenses_by_date(engine: Engine, day: date) -> List[ExpenseOut]:
    return get_expenses_by_date(engine, day)


def _customer_totals_stmt():
    total_credit = (
        select(func.coalesce(func.sum(bills.c.total_amount), 0))
        .select_from(bills.join(credit_bills, bills.c.id == credit_bills.c.bill_id))
        .where(credit_bills.c.customer_id == credit_customers.c.id)
        .scalar_subquery()
    )
    total_paid = (
        select(func.coalesce(func.sum(credit_payments.c.amount), 0))
        .where(credit_payments.c.customer_id == credit_customers.c.id)
        .scalar_subquery()
    )

    return select(
        credit_customers.c.id,
        credit_customers.c.name,
        credit_customers.c.phone,
        total_credit.label("total_credit"),
        total_paid.label("total_paid"),
    )


def _summary_fields(row) -> dict:
    total_credit = Decimal(row["total_credit"] or ZERO)
    total_paid = Decimal(row["total_paid"] or ZERO)
    return {
        "id": row["id"],
        "name": row["name"],
        "phone": row["phone"],
        "total_credit": total_credit,
        "total_paid": total_paid,
        "balance": total_credit - total_paid,
    }


def customer_summary(engine: Engine) -> List[CustomerSummaryOut]:
    """Every credit customer with derived totals, ordered by name."""
    stmt = _customer_totals_stmt().order_by(credit_customers.c.name, credit_customers.c.id)

    with read_connection(engine, "credit customer summary") as conn:
        rows = conn.execute(stmt).mappings().all()

    return [CustomerSummaryOut(**_summary_fields(row)) for row in rows]


def customer_detail(engine: Engine, customer_id: int) -> Optional[CustomerDetailOut]:
    """
    Balance plus full bill and payment history for one customer.

    Returns None when the id does not resolve, so callers can tell
    "no such customer" apart from a storage failure.
    """
    with read_connection(engine, "credit customer detail") as conn:
        row = conn.execute(
            _customer_totals_stmt().where(credit_customers.c.id == customer_id)
        ).mappings().first()
        if row is None:
            return None

        bill_rows = conn.execute(
            select(bills.c.id, bills.c.created_at, bills.c.total_amount)
            .select_from(bills.join(credit_bills, bills.c.id == credit_bills.c.bill_id))
            .where(credit_bills.c.customer_id == customer_id)
            .order_by(bills.c.created_at.desc(), bills.c.id.desc())
        ).mappings().all()

        payment_rows = conn.execute(
            select(credit_payments.c.id, credit_payments.c.date, credit_payments.c.amount)
            .where(credit_payments.c.customer_id == customer_id)
            .order_by(credit_payments.c.date.desc(), credit_payments.c.id.desc())
        ).mappings().all()

    return CustomerDetailOut(
        **_summary_fields(row),
        bills=[
            CustomerBillOut(
                id=b["id"],
                created_at=b["created_at"],
                date=b["created_at"].date(),
                time=b["created_at"].strftime("%H:%M:%S"),
                total_amount=b["total_amount"],
            )
            for b in bill_rows
        ],
        payments=[
            PaymentOut(id=p["id"], date=p["date"], amount=p["amount"])
            for p in payment_rows
        ],
    )
