"""Money arithmetic for prices, subtotals and totals.

Amounts are stored as floats with two decimals; arithmetic goes through
Decimal so that sums of subtotals match the totals they produce.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def as_decimal(value) -> Decimal:
    try:
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Not a monetary amount: {value!r}") from exc


def to_money(value) -> float:
    """Round an amount half-up to cents."""
    return float(as_decimal(value))


def line_subtotal(quantity: int, unit_price) -> float:
    return float((as_decimal(unit_price) * quantity).quantize(CENT, rounding=ROUND_HALF_UP))


def money_sum(amounts) -> float:
    return float(sum((as_decimal(amount) for amount in amounts), Decimal("0.00")))
