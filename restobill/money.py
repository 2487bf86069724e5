# restobill/money.py

from decimal import Decimal, InvalidOperation

from restobill.errors import ValidationError

CENT = Decimal("0.01")


def parse_money(value, field: str) -> Decimal:
    """
    Non-negative amount with at most two decimal places.

    Money columns are Numeric(18, 2); anything finer would be rounded by the
    store and bill totals would stop matching their lines.
    """
    if value is None:
        raise ValidationError(f"{field} is required")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"{field} must be a number") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")
    if amount < 0:
        raise ValidationError(f"{field} must be >= 0")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field} must have at most 2 decimal places")
    return amount
