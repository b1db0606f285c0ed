"""Payoff priority ordering for the snowball and avalanche strategies."""

from __future__ import annotations

from typing import Any, Hashable, Iterable, Literal

from ..errors import ValidationError
from .snapshots import DebtSnapshot

Strategy = Literal["snowball", "avalanche"]
STRATEGIES: tuple[Strategy, ...] = ("snowball", "avalanche")


def _id_key(debt_id: Hashable) -> tuple[int, Any]:
    # Numeric ids sort numerically; anything else falls back to its text.
    if isinstance(debt_id, int) and not isinstance(debt_id, bool):
        return (0, debt_id)
    return (1, str(debt_id))


def _snowball_key(debt: DebtSnapshot) -> tuple:
    return (
        debt.current_balance,
        not debt.is_priority,
        debt.annual_interest_rate,
        _id_key(debt.id),
    )


def _avalanche_key(debt: DebtSnapshot) -> tuple:
    return (
        -debt.annual_interest_rate,
        not debt.is_priority,
        debt.current_balance,
        _id_key(debt.id),
    )


_SORT_KEYS = {"snowball": _snowball_key, "avalanche": _avalanche_key}


def order_debts(debts: Iterable[DebtSnapshot], strategy: str) -> list[DebtSnapshot]:
    """Return *debts* in payoff priority order for *strategy*.

    Snowball sorts by ascending balance, avalanche by descending rate. Ties go
    to priority-flagged debts, then the other strategy's metric, then id, so
    the order is total and repeatable. It is computed once per simulation.
    """

    key = _SORT_KEYS.get(strategy)
    if key is None:
        raise ValidationError(
            f"Invalid debt payoff strategy: {strategy!r}", field="strategy"
        )
    return sorted(debts, key=key)


def snowball_order(debts: Iterable[DebtSnapshot]) -> list[DebtSnapshot]:
    """Smallest balance first."""
    return order_debts(debts, "snowball")


def avalanche_order(debts: Iterable[DebtSnapshot]) -> list[DebtSnapshot]:
    """Highest interest rate first."""
    return order_debts(debts, "avalanche")


__all__ = ["STRATEGIES", "Strategy", "avalanche_order", "order_debts", "snowball_order"]
