"""Monetary arithmetic

Amounts and hours are Decimals stored as Numeric(18, 6). Every derived
value is quantized to the same precision so stored and computed values
compare equal.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

MONEY_PLACES = Decimal("0.000001")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def quantize(value: Decimal) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def compute_amount(hours: Decimal, hourly_rate: Decimal) -> Decimal:
    """amount = hours * hourly_rate"""
    return quantize(Decimal(hours) * Decimal(hourly_rate))


def compute_subtotal(amounts: Iterable[Decimal]) -> Decimal:
    return quantize(sum((Decimal(a) for a in amounts), ZERO))


def compute_total(subtotal: Decimal, tax_rate: Decimal) -> Decimal:
    """total = subtotal + subtotal * tax_rate / 100"""
    subtotal = Decimal(subtotal)
    return quantize(subtotal + subtotal * Decimal(tax_rate) / HUNDRED)
