"""Error taxonomy raised by the payoff engine."""

from __future__ import annotations

from typing import Hashable, Optional


class PayoffError(Exception):
    """Base class for every error the engine raises."""


class ValidationError(PayoffError):
    """Malformed input: negative amounts, duplicate ids, unknown strategy."""

    def __init__(
        self, message: str, *, field: str, debt_id: Optional[Hashable] = None
    ) -> None:
        super().__init__(message)
        self.field = field
        self.debt_id = debt_id


class EmptyInputError(PayoffError):
    """No debt with an outstanding balance was supplied."""


class InsufficientPaymentError(PayoffError):
    """Monthly payments cannot retire the debts.

    Raised up front when payments do not exceed the first month's interest and
    at runtime when a simulation passes its month cap.
    """

    def __init__(
        self,
        message: str,
        *,
        month: Optional[int] = None,
        strategy: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.month = month
        self.strategy = strategy


__all__ = ["PayoffError", "ValidationError", "EmptyInputError", "InsufficientPaymentError"]
