"""Submitted checkout lines — parsing and validation.

A client submits lines as ``{product_id, quantity, unit_price}`` where
``unit_price`` is an optional price hint. Every line is validated before the
checkout touches storage; lines naming the same product are merged.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from storefront.exceptions import InvalidLineError
from storefront.shared.money import as_decimal

MAX_QUANTITY = 100_000
MAX_UNIT_PRICE = Decimal("1000000000.00")


@dataclass(frozen=True)
class SubmittedLine:
    product_id: str
    quantity: int
    price_hint: Decimal | None = None


def _parse_quantity(raw: Any, position: int) -> int:
    # bool is an int subclass; True is not a quantity
    if isinstance(raw, bool):
        raise InvalidLineError(f"Line {position}: quantity must be an integer", line=position)
    if isinstance(raw, int):
        quantity = raw
    elif isinstance(raw, float) and raw.is_integer():
        quantity = int(raw)
    elif isinstance(raw, str) and raw.strip().lstrip("-").isdigit():
        quantity = int(raw.strip())
    else:
        raise InvalidLineError(f"Line {position}: quantity must be an integer", line=position)

    if quantity < 1:
        raise InvalidLineError(f"Line {position}: quantity must be at least 1", line=position)
    if quantity > MAX_QUANTITY:
        raise InvalidLineError(f"Line {position}: quantity cannot exceed {MAX_QUANTITY}", line=position)
    return quantity


def _parse_price_hint(raw: Any, position: int) -> Decimal | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise InvalidLineError(f"Line {position}: unit_price must be a number", line=position)
    try:
        price = as_decimal(raw)
    except ValueError as exc:
        raise InvalidLineError(f"Line {position}: unit_price must be a number", line=position) from exc
    if not price.is_finite():
        raise InvalidLineError(f"Line {position}: unit_price must be a number", line=position)
    if price < 0:
        raise InvalidLineError(f"Line {position}: unit_price cannot be negative", line=position)
    if price > MAX_UNIT_PRICE:
        raise InvalidLineError(f"Line {position}: unit_price cannot exceed {MAX_UNIT_PRICE}", line=position)
    return price


def parse_line(raw: Any, position: int = 0) -> SubmittedLine:
    """Validate one submitted line. Raises InvalidLineError."""
    if not isinstance(raw, dict):
        raise InvalidLineError(f"Line {position}: expected an object", line=position)

    product_id = raw.get("product_id")
    if product_id is None or str(product_id).strip() == "":
        raise InvalidLineError(f"Line {position}: product_id is required", line=position)
    if "quantity" not in raw or raw["quantity"] is None:
        raise InvalidLineError(f"Line {position}: quantity is required", line=position)

    return SubmittedLine(
        product_id=str(product_id).strip(),
        quantity=_parse_quantity(raw["quantity"], position),
        price_hint=_parse_price_hint(raw.get("unit_price"), position),
    )


def parse_lines(raw_lines) -> list[SubmittedLine]:
    """Validate every line, then merge lines for the same product.

    Quantities of repeated products are summed and the first price hint seen
    for the product wins. The result keeps first-seen order.
    """
    if not raw_lines:
        raise InvalidLineError("Checkout needs at least one line")

    merged: dict[str, SubmittedLine] = {}
    for position, raw in enumerate(raw_lines):
        line = parse_line(raw, position)
        existing = merged.get(line.product_id)
        if existing is None:
            merged[line.product_id] = line
        else:
            if existing.quantity + line.quantity > MAX_QUANTITY:
                raise InvalidLineError(
                    f"Line {position}: total quantity for {line.product_id} cannot exceed {MAX_QUANTITY}",
                    line=position,
                )
            merged[line.product_id] = SubmittedLine(
                product_id=line.product_id,
                quantity=existing.quantity + line.quantity,
                price_hint=existing.price_hint if existing.price_hint is not None else line.price_hint,
            )
    return list(merged.values())
