"""Snowball vs. avalanche comparison and recommendation.

``compute_payoff_strategies`` is the engine's entry point: it validates the
debts, runs both strategies and decides which one to recommend. It reads no
clock and no environment; the caller supplies ``clock_now`` and, if needed,
a :class:`~payoffsage.config.PayoffPolicy`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Literal, Optional

from ..config import PayoffPolicy
from ..errors import PayoffError, ValidationError
from ..logging_config import get_logger
from ..money import PERCENT, ZERO, Numeric, as_float, quantize, to_money
from .debts import PayoffStrategyResult, simulate_payoff
from .snapshots import SnapshotLike, normalize_debts

logger = get_logger("services.payoff")

Confidence = Literal["high", "medium", "low"]


@dataclass(slots=True)
class Recommendation:
    method: str
    reason: str
    confidence: Confidence

    def to_dict(self) -> dict[str, Any]:
        return {"method": self.method, "reason": self.reason, "confidence": self.confidence}


@dataclass(slots=True)
class StrategyComparison:
    interest_savings: Decimal
    time_difference: int
    faster_method: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "interestSavings": as_float(self.interest_savings),
            "timeDifference": self.time_difference,
            "fasterMethod": self.faster_method,
        }


@dataclass(slots=True)
class PayoffComparisonResult:
    snowball: PayoffStrategyResult
    avalanche: PayoffStrategyResult
    recommendation: Recommendation
    comparison: StrategyComparison

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready payload using the established client field names."""
        return {
            "snowball": self.snowball.to_dict(),
            "avalanche": self.avalanche.to_dict(),
            "recommendation": self.recommendation.to_dict(),
            "comparison": self.comparison.to_dict(),
        }


def compare_strategies(
    snowball: PayoffStrategyResult, avalanche: PayoffStrategyResult
) -> StrategyComparison:
    """Interest and time deltas, measured as snowball minus avalanche."""

    faster = (
        "avalanche"
        if avalanche.months_to_payoff <= snowball.months_to_payoff
        else "snowball"
    )
    return StrategyComparison(
        interest_savings=snowball.total_interest - avalanche.total_interest,
        time_difference=snowball.months_to_payoff - avalanche.months_to_payoff,
        faster_method=faster,
    )


def materiality_threshold(total_debt: Decimal, policy: PayoffPolicy) -> Decimal:
    """Interest savings below this amount are not worth giving up quick wins."""

    return quantize(total_debt * policy.materiality_percent / PERCENT)


def recommend_strategy(
    snowball: PayoffStrategyResult,
    avalanche: PayoffStrategyResult,
    *,
    total_debt: Decimal,
    policy: Optional[PayoffPolicy] = None,
) -> Recommendation:
    """Pick avalanche only when its interest savings are material.

    Otherwise snowball wins: clearing small balances early keeps momentum
    and the interest difference is marginal.
    """

    policy = policy or PayoffPolicy()
    comparison = compare_strategies(snowball, avalanche)
    savings = comparison.interest_savings
    threshold = materiality_threshold(total_debt, policy)

    if savings > threshold:
        confidence: Confidence = (
            "high" if savings >= threshold * policy.high_confidence_multiple else "medium"
        )
        return Recommendation(
            method="avalanche",
            reason=(
                f"Avalanche saves {savings:.2f} in interest, above the "
                f"{threshold:.2f} materiality threshold"
            ),
            confidence=confidence,
        )

    if comparison.time_difference == 0:
        return Recommendation(
            method="snowball",
            reason=(
                f"Both strategies finish in {snowball.months_to_payoff} months with "
                f"nearly identical interest; snowball clears individual debts sooner"
            ),
            confidence="low",
        )
    return Recommendation(
        method="snowball",
        reason=(
            f"Interest savings of {savings:.2f} are within the {threshold:.2f} "
            f"threshold; paying off small balances first keeps momentum"
        ),
        confidence="medium",
    )


def compute_payoff_strategies(
    *,
    debts: Iterable[SnapshotLike],
    extra_payment: Numeric = 0,
    clock_now: date,
    policy: Optional[PayoffPolicy] = None,
) -> PayoffComparisonResult:
    """Simulate both strategies for *debts* and recommend one.

    Raises:
        ValidationError: malformed debts or a negative extra payment.
        EmptyInputError: no debt has an outstanding balance.
        InsufficientPaymentError: payments cannot retire the debts.
    """

    if not isinstance(clock_now, date):
        raise TypeError("clock_now must be a date or datetime")
    policy = policy or PayoffPolicy()

    try:
        try:
            extra = to_money(extra_payment)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                f"Extra payment is not numeric: {extra_payment!r}", field="extraPayment"
            ) from exc

        active = normalize_debts(debts, extra_payment=extra)
        snowball = simulate_payoff(
            active,
            strategy="snowball",
            clock_now=clock_now,
            extra_payment=extra,
            max_months=policy.max_months,
        )
        avalanche = simulate_payoff(
            active,
            strategy="avalanche",
            clock_now=clock_now,
            extra_payment=extra,
            max_months=policy.max_months,
        )
    except PayoffError as exc:
        logger.warning(
            "Payoff comparison rejected",
            extra={"error": type(exc).__name__, "detail": str(exc)},
        )
        raise

    total_debt = sum((d.current_balance for d in active), ZERO)
    result = PayoffComparisonResult(
        snowball=snowball,
        avalanche=avalanche,
        recommendation=recommend_strategy(
            snowball, avalanche, total_debt=total_debt, policy=policy
        ),
        comparison=compare_strategies(snowball, avalanche),
    )
    logger.info(
        "Computed payoff strategies",
        extra={
            "debts": len(active),
            "extra_payment": str(extra),
            "recommended": result.recommendation.method,
            "confidence": result.recommendation.confidence,
        },
    )
    return result


__all__ = [
    "PayoffComparisonResult",
    "Recommendation",
    "StrategyComparison",
    "compare_strategies",
    "compute_payoff_strategies",
    "materiality_threshold",
    "recommend_strategy",
]
