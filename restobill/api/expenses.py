# restobill/api/expenses.py

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.engine import Engine

from restobill import expenses
from restobill.db.engine import get_engine
from restobill.models.expenses import ExpenseIn, ExpenseOut
from restobill.models.items import Created

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("/", response_model=List[ExpenseOut])
def get_expenses_by_date_range(
    start_date: date = Query(..., description="ISO date (YYYY-MM-DD), inclusive"),
    end_date: date = Query(..., description="ISO date (YYYY-MM-DD), inclusive"),
    engine: Engine = Depends(get_engine),
) -> List[ExpenseOut]:
    return expenses.get_expenses_by_date_range(engine, start_date, end_date)


@router.post("/", response_model=Created, status_code=201)
def add_expense(expense: ExpenseIn, engine: Engine = Depends(get_engine)) -> Created:
    expense_id = expenses.add_expense(
        engine, expense.description, expense.amount, expense.expense_date
    )
    return Created(id=expense_id)


@router.put("/{expense_id}", status_code=204)
def update_expense(
    expense_id: int,
    expense: ExpenseIn,
    engine: Engine = Depends(get_engine),
) -> Response:
    expenses.update_expense(
        engine, expense_id, expense.description, expense.amount, expense.expense_date
    )
    return Response(status_code=204)


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: int, engine: Engine = Depends(get_engine)) -> Response:
    expenses.delete_expense(engine, expense_id)
    return Response(status_code=204)
