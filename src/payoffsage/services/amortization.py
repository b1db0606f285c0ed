"""Single-debt amortization math.

``step_debt`` advances one balance by one month and is the building block the
multi-debt simulator drives. The remaining helpers answer single-loan
questions (level payment for a term, months to payoff, a dated schedule).
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_CEILING, Decimal
from typing import Optional, TypeVar

from ..errors import InsufficientPaymentError, ValidationError
from ..money import ZERO, monthly_interest, monthly_rate, quantize, to_decimal, to_money

DEFAULT_MAX_MONTHS = 1200

_D = TypeVar("_D", bound=date)


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of applying one month's payment to one debt."""

    new_balance: Decimal
    interest_paid: Decimal
    principal_paid: Decimal
    overflow: Decimal
    paid_off: bool
    amount_applied: Decimal


@dataclass(slots=True)
class ScheduleRow:
    """Represents a single projected payment for one debt."""

    due_date: date
    payment: Decimal
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal


def step_debt(*, balance: Decimal, annual_rate: Decimal, payment: Decimal) -> StepResult:
    """Accrue one month of interest on *balance* and apply *payment*.

    A payment that covers balance plus interest retires the debt and the
    surplus comes back as ``overflow``. A payment below the accrued interest
    pays no principal and the shortfall is added to the balance.
    """

    interest = monthly_interest(balance, annual_rate)
    payoff_amount = balance + interest
    if payment >= payoff_amount:
        return StepResult(
            new_balance=ZERO,
            interest_paid=interest,
            principal_paid=balance,
            overflow=payment - payoff_amount,
            paid_off=True,
            amount_applied=payoff_amount,
        )
    return StepResult(
        new_balance=payoff_amount - payment,
        interest_paid=interest,
        principal_paid=max(payment - interest, ZERO),
        overflow=ZERO,
        paid_off=False,
        amount_applied=payment,
    )


def add_months(start: _D, months: int) -> _D:
    """Shift *start* by whole calendar months, clamping to the month's last day."""

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


def monthly_payment_for_term(
    *, principal: Decimal, annual_rate: Decimal, term_months: int
) -> Decimal:
    """Level monthly payment that retires *principal* in *term_months*."""

    if term_months <= 0:
        raise ValidationError("term_months must be positive", field="termMonths")
    principal = to_decimal(principal)
    rate = monthly_rate(to_decimal(annual_rate))
    if rate == 0:
        return quantize(principal / term_months)
    growth = (1 + rate) ** term_months
    return quantize(principal * rate * growth / (growth - 1))


def months_to_payoff(
    *, balance: Decimal, annual_rate: Decimal, payment: Decimal
) -> Optional[int]:
    """Closed-form number of months a fixed payment needs to clear *balance*.

    Returns ``None`` when the payment never outpaces the interest.
    """

    balance = to_decimal(balance)
    payment = to_decimal(payment)
    if balance <= 0:
        return 0
    if payment <= 0:
        return None
    rate = monthly_rate(to_decimal(annual_rate))
    if rate == 0:
        return int((balance / payment).to_integral_value(rounding=ROUND_CEILING))
    if balance * rate >= payment:
        return None
    periods = -(1 - rate * balance / payment).ln() / (1 + rate).ln()
    return int(periods.to_integral_value(rounding=ROUND_CEILING))


def amortization_schedule(
    *,
    balance: Decimal,
    annual_rate: Decimal,
    payment: Decimal,
    start: date,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> list[ScheduleRow]:
    """Month-by-month schedule for one debt paid with a fixed amount.

    The first row falls one month after *start*; the final row carries only
    the amount needed to close the balance.
    """

    balance = to_money(balance)
    annual_rate = to_decimal(annual_rate)
    payment = to_money(payment)
    if balance <= 0:
        return []
    if payment <= monthly_interest(balance, annual_rate):
        raise InsufficientPaymentError(
            f"Payment {payment} does not exceed the first month's interest"
        )

    rows: list[ScheduleRow] = []
    while balance > 0:
        if len(rows) >= max_months:
            raise InsufficientPaymentError(
                f"Balance not retired within {max_months} months", month=len(rows)
            )
        step = step_debt(balance=balance, annual_rate=annual_rate, payment=payment)
        rows.append(
            ScheduleRow(
                due_date=add_months(start, len(rows) + 1),
                payment=step.amount_applied,
                principal=step.principal_paid,
                interest=step.interest_paid,
                remaining_balance=step.new_balance,
            )
        )
        balance = step.new_balance
    return rows


__all__ = [
    "DEFAULT_MAX_MONTHS",
    "ScheduleRow",
    "StepResult",
    "add_months",
    "amortization_schedule",
    "monthly_payment_for_term",
    "months_to_payoff",
    "step_debt",
]
