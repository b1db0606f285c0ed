"""Fixed-point money helpers.

All amounts handled by the payoff engine are ``Decimal`` values quantized to
the currency's minor unit. Interest is rounded with ``ROUND_HALF_EVEN`` so
long simulations do not drift in one direction.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MONTHS_PER_YEAR = Decimal(12)
PERCENT = Decimal(100)

Numeric = Union[Decimal, int, float, str]


def to_decimal(value: Numeric) -> Decimal:
    """Convert *value* to ``Decimal`` without going through binary floats."""

    if isinstance(value, bool):
        raise TypeError("Boolean values are not amounts")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        # str() keeps the short repr (0.1 -> "0.1") instead of the binary expansion
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a numeric amount: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return result


def quantize(amount: Decimal) -> Decimal:
    """Round to cents using banker's rounding."""

    return amount.quantize(CENT, rounding=ROUND_HALF_EVEN)


def to_money(value: Numeric) -> Decimal:
    """Parse and round an amount to cents."""

    return quantize(to_decimal(value))


def monthly_rate(annual_rate: Decimal) -> Decimal:
    """Return the monthly periodic rate for an annual percentage."""

    return annual_rate / PERCENT / MONTHS_PER_YEAR


def monthly_interest(balance: Decimal, annual_rate: Decimal) -> Decimal:
    """Interest accrued on *balance* for one month, rounded half-even to cents."""

    return quantize(balance * monthly_rate(annual_rate))


def as_float(amount: Decimal) -> float:
    """Wire representation of an amount (JSON number)."""

    return float(amount)
