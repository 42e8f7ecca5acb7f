#!/usr/bin/env python3
"""
Amount Handling Utilities

Record amounts are kept as Decimal values parsed from their textual form.
Totals accumulate exactly, and an untouched amount is written back with the
same digits it was read with.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import RecordParseError

ZERO = Decimal("0")


def parse_amount(amount_str: str) -> Decimal:
    """
    Parse an amount such as "12.5", "-3", or "1,234.50".

    Args:
        amount_str: Amount text

    Returns:
        Decimal value

    Raises:
        RecordParseError: If the text is not a finite number
    """
    cleaned = amount_str.strip().replace(",", "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise RecordParseError(f"Invalid amount '{amount_str}'") from None

    if not value.is_finite():
        raise RecordParseError(f"Invalid amount '{amount_str}'")
    return value


def format_amount(amount: Decimal) -> str:
    """Format an amount for the record files (never in exponent notation)."""
    return format(amount, "f")


def format_display(amount: Decimal, decimals: int = 2, symbol: str = "") -> str:
    """
    Format an amount for tables.

    Example:
        format_display(Decimal("12.5"), symbol="$") -> "$12.50"
    """
    quantum = Decimal(1).scaleb(-decimals)
    rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{symbol}{rounded:,.{decimals}f}"
