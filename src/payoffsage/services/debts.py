"""Debt payoff simulation (snowball and avalanche)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Hashable, Iterable, Sequence

from ..errors import EmptyInputError, InsufficientPaymentError, ValidationError
from ..logging_config import get_logger
from ..money import ZERO, as_float
from .amortization import DEFAULT_MAX_MONTHS, add_months, step_debt
from .ordering import order_debts
from .snapshots import DebtSnapshot, total_monthly_payment

logger = get_logger("services.debts")


@dataclass(slots=True)
class SimulationMonthRecord:
    """Portfolio totals after one simulated month."""

    month: int
    total_balance: Decimal
    total_interest: Decimal
    payments: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "totalBalance": as_float(self.total_balance),
            "totalInterest": as_float(self.total_interest),
            "payments": as_float(self.payments),
        }


@dataclass(slots=True)
class PayoffEntry:
    """When a debt was cleared and what it cost in total."""

    debt_id: Hashable
    name: str
    paid_off_month: int
    total_paid: Decimal
    interest_paid: Decimal = ZERO

    @property
    def principal_paid(self) -> Decimal:
        return self.total_paid - self.interest_paid

    def to_dict(self) -> dict[str, Any]:
        return {
            "debtId": self.debt_id,
            "name": self.name,
            "paidOffMonth": self.paid_off_month,
            "totalPaid": as_float(self.total_paid),
        }


@dataclass(slots=True)
class PayoffStrategyResult:
    """Full outcome of running one strategy to a zero balance."""

    strategy: str
    months_to_payoff: int
    payoff_date: date
    total_interest: Decimal
    total_payments: Decimal
    monthly_payment: Decimal
    payoff_order: list[PayoffEntry] = field(default_factory=list)
    simulation: list[SimulationMonthRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": self.strategy,
            "monthsToPayoff": self.months_to_payoff,
            "payoffDate": self.payoff_date.isoformat(),
            "totalInterest": as_float(self.total_interest),
            "totalPayments": as_float(self.total_payments),
            "payoffOrder": [entry.to_dict() for entry in self.payoff_order],
            "simulation": [record.to_dict() for record in self.simulation],
            "monthlyPayment": as_float(self.monthly_payment),
        }


@dataclass(slots=True)
class _DebtState:
    """Running balance for one debt inside a single simulation."""

    snapshot: DebtSnapshot
    balance: Decimal
    total_paid: Decimal = ZERO
    interest_paid: Decimal = ZERO


def simulate_payoff(
    debts: Iterable[DebtSnapshot],
    *,
    strategy: str,
    clock_now: date,
    extra_payment: Decimal = ZERO,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> PayoffStrategyResult:
    """Run *strategy* month by month until every balance reaches zero.

    The priority order is fixed up front. Each month every open debt gets its
    minimum; the first open debt also gets the extra payment plus minimums
    freed by debts cleared in earlier months. When a debt clears mid-month,
    its leftover payment moves to the next open debt in the same month.

    Expects validated snapshots (see ``normalize_debts``).

    Raises:
        InsufficientPaymentError: debts remain after ``max_months``.
    """

    if extra_payment < 0:
        raise ValidationError("Extra payment must be non-negative", field="extraPayment")
    ordered = order_debts(debts, strategy)
    if not ordered:
        raise EmptyInputError("No debts to simulate")

    monthly_payment = total_monthly_payment(ordered, extra_payment)
    active = [_DebtState(snapshot=d, balance=d.current_balance) for d in ordered]

    simulation: list[SimulationMonthRecord] = []
    payoff_order: list[PayoffEntry] = []
    cumulative_interest = ZERO
    total_payments = ZERO

    while active:
        month = len(simulation) + 1
        if month > max_months:
            raise InsufficientPaymentError(
                f"{strategy} payoff did not finish within {max_months} months",
                month=max_months,
                strategy=strategy,
            )

        # Extra payment plus minimums released by debts already cleared.
        carry = monthly_payment - sum((s.snapshot.minimum_payment for s in active), ZERO)
        month_interest = ZERO
        month_payments = ZERO
        still_open: list[_DebtState] = []

        for state in active:
            step = step_debt(
                balance=state.balance,
                annual_rate=state.snapshot.annual_interest_rate,
                payment=state.snapshot.minimum_payment + carry,
            )
            carry = step.overflow
            state.balance = step.new_balance
            state.total_paid += step.amount_applied
            state.interest_paid += step.interest_paid
            month_interest += step.interest_paid
            month_payments += step.amount_applied

            if step.paid_off:
                payoff_order.append(
                    PayoffEntry(
                        debt_id=state.snapshot.id,
                        name=state.snapshot.name,
                        paid_off_month=month,
                        total_paid=state.total_paid,
                        interest_paid=state.interest_paid,
                    )
                )
            else:
                still_open.append(state)

        active = still_open
        cumulative_interest += month_interest
        total_payments += month_payments
        total_balance = sum((s.balance for s in active), ZERO)

        simulation.append(
            SimulationMonthRecord(
                month=month,
                total_balance=total_balance,
                total_interest=cumulative_interest,
                payments=month_payments,
            )
        )

    months = len(simulation)
    logger.debug(
        "Simulated payoff strategy",
        extra={
            "strategy": strategy,
            "debts": len(ordered),
            "months": months,
            "total_interest": str(cumulative_interest),
        },
    )
    return PayoffStrategyResult(
        strategy=strategy,
        months_to_payoff=months,
        payoff_date=add_months(clock_now, months),
        total_interest=cumulative_interest,
        total_payments=total_payments,
        monthly_payment=monthly_payment,
        payoff_order=payoff_order,
        simulation=simulation,
    )


def sample_simulation(
    records: Sequence[SimulationMonthRecord], *, every: int = 6
) -> list[SimulationMonthRecord]:
    """Thin a simulation to every *every*-th month plus the final month."""

    if every <= 0:
        raise ValueError("every must be positive")
    last = len(records) - 1
    return [r for i, r in enumerate(records) if i % every == 0 or i == last]


def snowball_schedule(
    debts: Iterable[DebtSnapshot], *, clock_now: date, extra_payment: Decimal = ZERO
) -> PayoffStrategyResult:
    """Return the payoff result prioritizing smallest balances first."""
    return simulate_payoff(
        debts, strategy="snowball", clock_now=clock_now, extra_payment=extra_payment
    )


def avalanche_schedule(
    debts: Iterable[DebtSnapshot], *, clock_now: date, extra_payment: Decimal = ZERO
) -> PayoffStrategyResult:
    """Return the payoff result prioritizing highest APR first."""
    return simulate_payoff(
        debts, strategy="avalanche", clock_now=clock_now, extra_payment=extra_payment
    )


__all__ = [
    "PayoffEntry",
    "PayoffStrategyResult",
    "SimulationMonthRecord",
    "avalanche_schedule",
    "sample_simulation",
    "simulate_payoff",
    "snowball_schedule",
]
