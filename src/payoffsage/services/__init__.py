"""Service module exports."""

from . import amortization, debts, export_csv, liabilities, ordering, payoff, snapshots
from .payoff import PayoffComparisonResult, compute_payoff_strategies
from .snapshots import DebtSnapshot

__all__ = [
    "DebtSnapshot",
    "PayoffComparisonResult",
    "amortization",
    "compute_payoff_strategies",
    "debts",
    "export_csv",
    "liabilities",
    "ordering",
    "payoff",
    "snapshots",
]
