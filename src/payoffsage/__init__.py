"""PayoffSage debt payoff strategy engine."""

from __future__ import annotations

from .config import BaseConfig, PayoffPolicy
from .errors import EmptyInputError, InsufficientPaymentError, PayoffError, ValidationError
from .services.payoff import PayoffComparisonResult, compute_payoff_strategies
from .services.snapshots import DebtSnapshot

__all__ = [
    "BaseConfig",
    "DebtSnapshot",
    "EmptyInputError",
    "InsufficientPaymentError",
    "PayoffComparisonResult",
    "PayoffError",
    "PayoffPolicy",
    "ValidationError",
    "compute_payoff_strategies",
]
