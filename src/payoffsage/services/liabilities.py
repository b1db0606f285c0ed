"""Adapters from stored liabilities to engine snapshots."""

from __future__ import annotations

from typing import Iterable

from ..models.liability import Liability
from ..money import to_decimal, to_money
from .snapshots import DebtSnapshot


def snapshot_from_liability(liability: Liability) -> DebtSnapshot:
    """Freeze a ``Liability`` row into a :class:`DebtSnapshot`."""

    if liability.id is None:
        raise ValueError(f"Liability {liability.name!r} has not been persisted")
    return DebtSnapshot(
        id=liability.id,
        name=liability.name,
        current_balance=to_money(liability.balance or 0.0),
        annual_interest_rate=to_decimal(liability.apr or 0.0),
        minimum_payment=to_money(liability.minimum_payment or 0.0),
        is_priority=bool(liability.is_priority),
    )


def snapshots_from_liabilities(liabilities: Iterable[Liability]) -> list[DebtSnapshot]:
    """Snapshots for every persisted liability, in input order."""

    return [snapshot_from_liability(liability) for liability in liabilities]


__all__ = ["snapshot_from_liability", "snapshots_from_liabilities"]
