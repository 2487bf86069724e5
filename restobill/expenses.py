# restobill/expenses.py

"""
Expense log. Unlike bills and credit payments, expense rows may be edited
and deleted.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine

from restobill import clock
from restobill.db.engine import read_connection, write_transaction
from restobill.db.schema import expenses
from restobill.errors import ReferenceNotFoundError, ValidationError
from restobill.models.expenses import ExpenseOut
from restobill.money import parse_money

logger = logging.getLogger(__name__)


def check_date_range(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ValidationError(
            f"start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )


def _clean(description: str, amount: Decimal) -> dict:
    description = (description or "").strip()
    if not description:
        raise ValidationError("expense description is required")
    return {"description": description, "amount": parse_money(amount, "expense amount")}


def _row_to_expense(row) -> ExpenseOut:
    return ExpenseOut(
        id=row["id"],
        expense_date=row["expense_date"],
        description=row["description"],
        amount=row["amount"],
    )


def add_expense(
    engine: Engine,
    description: str,
    amount: Decimal,
    expense_date: Optional[date] = None,
) -> int:
    """Record an outlay; the date defaults to today's local date."""
    values = _clean(description, amount)
    values["expense_date"] = expense_date or clock.local_today()

    with write_transaction(engine, "add expense") as conn:
        result = conn.execute(expenses.insert().values(**values))
        expense_id = result.inserted_primary_key[0]

    logger.info("Expense %s recorded: %s on %s", expense_id, values["amount"], values["expense_date"])
    return expense_id


def update_expense(
    engine: Engine,
    expense_id: int,
    description: str,
    amount: Decimal,
    expense_date: Optional[date] = None,
) -> None:
    values = _clean(description, amount)
    if expense_date is not None:
        values["expense_date"] = expense_date

    with write_transaction(engine, "update expense") as conn:
        result = conn.execute(
            expenses.update().where(expenses.c.id == expense_id).values(**values)
        )
        if result.rowcount == 0:
            raise ReferenceNotFoundError("expense", expense_id)

    logger.info("Expense %s updated", expense_id)


def delete_expense(engine: Engine, expense_id: int) -> None:
    with write_transaction(engine, "delete expense") as conn:
        result = conn.execute(expenses.delete().where(expenses.c.id == expense_id))
        if result.rowcount == 0:
            raise ReferenceNotFoundError("expense", expense_id)

    logger.info("Expense %s deleted", expense_id)


def get_expenses_by_date_range(engine: Engine, start_date: date, end_date: date) -> List[ExpenseOut]:
    check_date_range(start_date, end_date)

    stmt = (
        select(expenses)
        .where(expenses.c.expense_date >= start_date, expenses.c.expense_date <= end_date)
        .order_by(expenses.c.expense_date.desc(), expenses.c.id.desc())
    )

    with read_connection(engine, "expenses by date range") as conn:
        rows = conn.execute(stmt).mappings().all()

    return [_row_to_expense(row) for row in rows]


def get_expenses_by_date(engine: Engine, day: date) -> List[ExpenseOut]:
    stmt = (
        select(expenses)
        .where(expenses.c.expense_date == day)
        .order_by(expenses.c.id.desc())
    )

    with read_connection(engine, "expenses by date") as conn:
        rows = conn.execute(stmt).mappings().all()

    return [_row_to_expense(row) for row in rows]
