# restobill/billing.py

"""
Billing engine.

A bill is written as one unit: header, every cart line and (for a credit
sale) the single credit_bills link either all commit or none do. A bill
without its link would read back as a cash sale, so the link is never
written outside the same transaction as the header.
"""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.engine import Connection, Engine

from restobill import clock
from restobill.config import settings
from restobill.db.engine import read_connection, write_transaction
from restobill.db.schema import bill_items, bills, credit_bills, credit_customers, items
from restobill.errors import ReferenceNotFoundError, ValidationError
from restobill.money import parse_money
from restobill.models.bills import (
    BillDetail,
    BillLineOut,
    BillOut,
    CartLine,
    sale_kind_for,
)

logger = logging.getLogger(__name__)

CartInput = Union[CartLine, dict]


def _coerce_lines(lines: Optional[Iterable[CartInput]]) -> List[CartLine]:
    try:
        return [
            line if isinstance(line, CartLine) else CartLine.model_validate(line)
            for line in (lines or [])
        ]
    except PydanticValidationError as exc:
        raise ValidationError(f"malformed cart line: {exc}") from exc


def cart_total(lines: Sequence[CartLine]) -> Decimal:
    """
    Validate the cart and return sum(rate * quantity).

    Raises ValidationError for an empty cart, quantity < 1, or a rate that
    is negative or finer than a cent.
    """
    if not lines:
        raise ValidationError("cart is empty")

    total = Decimal("0")
    for position, line in enumerate(lines, start=1):
        if line.quantity < 1:
            raise ValidationError(f"line {position}: quantity must be >= 1")
        rate = parse_money(line.rate, f"line {position}: rate")
        total += rate * line.quantity
    return total


def _check_expected_total(total: Decimal, expected_total: Optional[Decimal]) -> None:
    if expected_total is not None and Decimal(expected_total) != total:
        raise ValidationError(
            f"total_amount {expected_total} does not match cart total {total}"
        )


def _check_references(
    conn: Connection,
    lines: Sequence[CartLine],
    credit_customer_id: Optional[int],
) -> None:
    item_ids = {line.item_id for line in lines}
    found = set(conn.execute(select(items.c.id).where(items.c.id.in_(item_ids))).scalars())
    missing = sorted(item_ids - found)
    if missing:
        raise ReferenceNotFoundError("item", missing[0])

    if credit_customer_id is not None:
        exists = conn.execute(
            select(credit_customers.c.id).where(credit_customers.c.id == credit_customer_id)
        ).first()
        if exists is None:
            raise ReferenceNotFoundError("credit customer", credit_customer_id)


def _write_lines(
    conn: Connection,
    bill_id: int,
    lines: Sequence[CartLine],
    credit_customer_id: Optional[int],
) -> None:
    conn.execute(
        bill_items.insert(),
        [
            {
                "bill_id": bill_id,
                "item_id": line.item_id,
                "quantity": line.quantity,
                "rate": Decimal(line.rate),
            }
            for line in lines
        ],
    )

    if credit_customer_id is not None:
        conn.execute(
            credit_bills.insert().values(bill_id=bill_id, customer_id=credit_customer_id)
        )


def create_bill(
    engine: Engine,
    lines: Iterable[CartInput],
    credit_customer_id: Optional[int] = None,
    expected_total: Optional[Decimal] = None,
) -> int:
    """
    Persist a cart as a new bill and return its id.

    `expected_total` is the total the caller displayed; when given it must
    equal the cart total. With `credit_customer_id` the bill is linked to
    that customer and counts as a credit sale.
    """
    cart = _coerce_lines(lines)
    total = cart_total(cart)
    _check_expected_total(total, expected_total)

    created_at = clock.local_now().replace(microsecond=0)

    with write_transaction(engine, "create bill") as conn:
        _check_references(conn, cart, credit_customer_id)

        result = conn.execute(
            bills.insert().values(created_at=created_at, total_amount=total)
        )
        bill_id = result.inserted_primary_key[0]
        _write_lines(conn, bill_id, cart, credit_customer_id)

    logger.info(
        "Bill %s saved: %s lines, total %s, %s",
        bill_id,
        len(cart),
        total,
        f"credit customer {credit_customer_id}" if credit_customer_id is not None else "cash",
    )
    return bill_id


def update_bill(
    engine: Engine,
    bill_id: int,
    lines: Iterable[CartInput],
    credit_customer_id: Optional[int] = None,
    expected_total: Optional[Decimal] = None,
) -> None:
    """
    Edit-and-reprint: replace a bill's lines (and credit link) in place.

    The bill keeps its id and created_at; total_amount is recomputed from
    the new lines.
    """
    cart = _coerce_lines(lines)
    total = cart_total(cart)
    _check_expected_total(total, expected_total)

    with write_transaction(engine, "update bill") as conn:
        existing = conn.execute(select(bills.c.id).where(bills.c.id == bill_id)).first()
        if existing is None:
            raise ReferenceNotFoundError("bill", bill_id)
        _check_references(conn, cart, credit_customer_id)

        conn.execute(bill_items.delete().where(bill_items.c.bill_id == bill_id))
        conn.execute(credit_bills.delete().where(credit_bills.c.bill_id == bill_id))
        conn.execute(bills.update().where(bills.c.id == bill_id).values(total_amount=total))
        _write_lines(conn, bill_id, cart, credit_customer_id)

    logger.info("Bill %s updated: %s lines, total %s", bill_id, len(cart), total)


def get_bill_history(engine: Engine, limit: Optional[int] = None) -> List[BillOut]:
    """Most recent bills first."""
    if limit is None:
        limit = settings.BILL_HISTORY_DEFAULT_LIMIT
    if limit < 1:
        raise ValidationError("limit must be >= 1")

    stmt = (
        select(bills.c.id, bills.c.created_at, bills.c.total_amount)
        .order_by(bills.c.created_at.desc(), bills.c.id.desc())
        .limit(limit)
    )

    with read_connection(engine, "bill history") as conn:
        rows = conn.execute(stmt).mappings().all()

    return [
        BillOut(id=row["id"], created_at=row["created_at"], total_amount=row["total_amount"])
        for row in rows
    ]


def _fetch_lines(conn: Connection, bill_id: int) -> List[BillLineOut]:
    stmt = (
        select(
            bill_items.c.item_id,
            items.c.name_local,
            items.c.name_common,
            bill_items.c.quantity,
            bill_items.c.rate,
        )
        .select_from(bill_items.join(items))
        .where(bill_items.c.bill_id == bill_id)
        .order_by(bill_items.c.id)
    )
    rows = conn.execute(stmt).mappings().all()

    return [
        BillLineOut(
            item_id=row["item_id"],
            name_local=row["name_local"],
            name_common=row["name_common"],
            quantity=row["quantity"],
            rate=row["rate"],
            amount=row["rate"] * row["quantity"],
        )
        for row in rows
    ]


def get_bill_items(engine: Engine, bill_id: int) -> List[BillLineOut]:
    with read_connection(engine, "bill items") as conn:
        return _fetch_lines(conn, bill_id)


def get_bill(engine: Engine, bill_id: int) -> Optional[BillDetail]:
    """Full bill (header, sale kind, lines) for reprinting, or None."""
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
        .where(bills.c.id == bill_id)
    )

    with read_connection(engine, "get bill") as conn:
        row = conn.execute(stmt).mappings().first()
        if row is None:
            return None
        lines = _fetch_lines(conn, bill_id)

    return BillDetail(
        id=row["id"],
        created_at=row["created_at"],
        total_amount=row["total_amount"],
        sale=sale_kind_for(row["customer_id"]),
        customer_name=row["customer_name"],
        lines=lines,
    )
