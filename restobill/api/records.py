# restobill/api/records.py

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.engine import Engine

from restobill import aggregator
from restobill.db.engine import get_engine
from restobill.models.bills import DayBillOut
from restobill.models.expenses import ExpenseOut
from restobill.models.records import DayRecord

router = APIRouter(prefix="/records", tags=["records"])


@router.get("/", response_model=List[DayRecord])
def get_daily_records(
    start_date: date = Query(..., description="ISO date (YYYY-MM-DD), inclusive"),
    end_date: date = Query(..., description="ISO date (YYYY-MM-DD), inclusive"),
    engine: Engine = Depends(get_engine),
) -> List[DayRecord]:
    """
    Per-day cash sales, credit sales, bill count, expenses and profit,
    newest day first.
    """
    return aggregator.daily_records(engine, start_date, end_date)


@router.get("/{day}/bills", response_model=List[DayBillOut])
def get_bills_by_date(day: date, engine: Engine = Depends(get_engine)) -> List[DayBillOut]:
    return aggregator.bills_by_date(engine, day)


@router.get("/{day}/expenses", response_model=List[ExpenseOut])
def get_expenses_by_date(day: date, engine: Engine = Depends(get_engine)) -> List[ExpenseOut]:
    return aggregator.expenses_by_date(engine, day)
