"""Daily records, per-day drill-downs and derived credit balances."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from restobill import aggregator, billing, credit, expenses
from restobill.errors import ValidationError
from restobill.models.bills import BillKind


def _bill(engine, menu, amount_units, customer_id=None):
    """A bill of `amount_units` idlies at 10 each."""
    return billing.create_bill(
        engine,
        [{"item_id": menu["idly"], "quantity": amount_units, "rate": Decimal("10")}],
        credit_customer_id=customer_id,
    )


def test_daily_record_splits_cash_and_credit(engine, menu, set_clock):
    customer_id = credit.add_credit_customer(engine, "Ravi")
    set_clock(datetime(2024, 1, 1, 10, 0, 0))
    _bill(engine, menu, 10)
    _bill(engine, menu, 5, customer_id=customer_id)
    expenses.add_expense(engine, "Vegetables", Decimal("30"), date(2024, 1, 1))

    records = aggregator.daily_records(engine, date(2024, 1, 1), date(2024, 1, 1))

    assert len(records) == 1
    record = records[0]
    assert record.date == date(2024, 1, 1)
    assert record.cash_sales == Decimal("100")
    assert record.credit_sales == Decimal("50")
    assert record.total_sales == Decimal("150")
    assert record.bill_count == 2
    assert record.total_expenses == Decimal("30")
    assert record.profit == Decimal("120")


def test_expense_only_day_is_zero_filled(engine, menu, set_clock):
    set_clock(datetime(2024, 1, 2, 19, 0, 0))
    _bill(engine, menu, 4)
    expenses.add_expense(engine, "Gas cylinder", Decimal("20"), date(2024, 1, 3))

    records = aggregator.daily_records(engine, date(2024, 1, 1), date(2024, 1, 31))

    assert [r.date for r in records] == [date(2024, 1, 3), date(2024, 1, 2)]
    expense_day = records[0]
    assert expense_day.cash_sales == 0
    assert expense_day.credit_sales == 0
    assert expense_day.total_sales == 0
    assert expense_day.bill_count == 0
    assert expense_day.profit == Decimal("-20")
    assert records[1].total_expenses == 0
    assert records[1].profit == Decimal("40")


def test_daily_records_use_local_day_boundaries(engine, menu, set_clock):
    set_clock(datetime(2024, 1, 1, 23, 59, 59))
    _bill(engine, menu, 1)
    set_clock(datetime(2024, 1, 2, 0, 0, 0))
    _bill(engine, menu, 2)

    records = aggregator.daily_records(engine, date(2024, 1, 1), date(2024, 1, 1))

    assert len(records) == 1
    assert records[0].total_sales == Decimal("10")


def test_daily_records_empty_range(engine):
    assert aggregator.daily_records(engine, date(2024, 5, 1), date(2024, 5, 31)) == []


def test_daily_records_rejects_reversed_range(engine):
    with pytest.raises(ValidationError):
        aggregator.daily_records(engine, date(2024, 2, 1), date(2024, 1, 1))


def test_bills_by_date_tags_type_and_customer(engine, menu, set_clock):
    customer_id = credit.add_credit_customer(engine, "Lakshmi")
    set_clock(datetime(2024, 1, 1, 8, 15, 0))
    cash_id = _bill(engine, menu, 3)
    set_clock(datetime(2024, 1, 1, 13, 45, 30))
    credit_id = _bill(engine, menu, 6, customer_id=customer_id)
    set_clock(datetime(2024, 1, 2, 8, 0, 0))
    _bill(engine, menu, 1)

    day_bills = aggregator.bills_by_date(engine, date(2024, 1, 1))

    assert [b.id for b in day_bills] == [credit_id, cash_id]
    assert day_bills[0].bill_type == BillKind.CREDIT
    assert day_bills[0].customer_name == "Lakshmi"
    assert day_bills[0].time == "13:45:30"
    assert day_bills[1].bill_type == BillKind.CASH
    assert day_bills[1].customer_name is None


def test_expenses_by_date(engine):
    first = expenses.add_expense(engine, "Milk", Decimal("60"), date(2024, 1, 1))
    second = expenses.add_expense(engine, "Rice bag", Decimal("1200"), date(2024, 1, 1))
    expenses.add_expense(engine, "Oil", Decimal("300"), date(2024, 1, 2))

    day = aggregator.expenses_by_date(engine, date(2024, 1, 1))

    assert [e.id for e in day] == [second, first]


def test_balance_is_billed_minus_paid(engine, menu):
    customer_id = credit.add_credit_customer(engine, "Anand")
    _bill(engine, menu, 30, customer_id=customer_id)
    _bill(engine, menu, 20, customer_id=customer_id)
    credit.add_credit_payment(engine, customer_id, Decimal("200"), date(2024, 1, 5))

    summary = aggregator.customer_summary(engine)
    detail = aggregator.customer_detail(engine, customer_id)

    assert summary[0].total_credit == Decimal("500")
    assert summary[0].total_paid == Decimal("200")
    assert summary[0].balance == Decimal("300")
    assert detail.balance == Decimal("300")

    credit.add_credit_payment(engine, customer_id, Decimal("300"), date(2024, 1, 6))

    assert aggregator.customer_summary(engine)[0].balance == 0
    assert aggregator.customer_detail(engine, customer_id).balance == 0


def test_overpayment_gives_negative_balance(engine, menu):
    customer_id = credit.add_credit_customer(engine, "Priya")
    _bill(engine, menu, 5, customer_id=customer_id)
    credit.add_credit_payment(engine, customer_id, Decimal("80"), date(2024, 1, 1))

    assert aggregator.customer_detail(engine, customer_id).balance == Decimal("-30")


def test_customer_summary_ordered_by_name_with_zero_totals(engine):
    credit.add_credit_customer(engine, "Vijay")
    credit.add_credit_customer(engine, "Arun", "9000000000")

    summary = aggregator.customer_summary(engine)

    assert [c.name for c in summary] == ["Arun", "Vijay"]
    assert summary[0].phone == "9000000000"
    assert summary[0].total_credit == 0
    assert summary[0].total_paid == 0
    assert summary[0].balance == 0


def test_customer_detail_history_ordering(engine, menu, set_clock):
    customer_id = credit.add_credit_customer(engine, "Meena")
    set_clock(datetime(2024, 1, 1, 9, 0, 0))
    older = _bill(engine, menu, 1, customer_id=customer_id)
    set_clock(datetime(2024, 1, 4, 20, 5, 0))
    newer = _bill(engine, menu, 2, customer_id=customer_id)
    p1 = credit.add_credit_payment(engine, customer_id, Decimal("5"), date(2024, 1, 2))
    p2 = credit.add_credit_payment(engine, customer_id, Decimal("5"), date(2024, 1, 3))
    p3 = credit.add_credit_payment(engine, customer_id, Decimal("5"), date(2024, 1, 3))

    detail = aggregator.customer_detail(engine, customer_id)

    assert [b.id for b in detail.bills] == [newer, older]
    assert detail.bills[0].date == date(2024, 1, 4)
    assert detail.bills[0].time == "20:05:00"
    assert [p.id for p in detail.payments] == [p3, p2, p1]


def test_customer_detail_not_found(engine):
    assert aggregator.customer_detail(engine, 4242) is None


def test_deleting_customer_reclassifies_their_bills_as_cash(engine, menu, set_clock):
    customer_id = credit.add_credit_customer(engine, "Gone")
    set_clock(datetime(2024, 1, 1, 12, 0, 0))
    _bill(engine, menu, 5, customer_id=customer_id)
    credit.add_credit_payment(engine, customer_id, Decimal("10"), date(2024, 1, 1))

    result = credit.delete_credit_customer(engine, customer_id)

    assert result.removed_bill_links == 1
    assert result.removed_payments == 1
    assert aggregator.customer_detail(engine, customer_id) is None
    record = aggregator.daily_records(engine, date(2024, 1, 1), date(2024, 1, 1))[0]
    assert record.cash_sales == Decimal("50")
    assert record.credit_sales == 0
