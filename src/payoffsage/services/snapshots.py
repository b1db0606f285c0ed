"""Debt snapshot inputs and their validation."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Hashable, Iterable, Mapping, Union

from ..errors import EmptyInputError, InsufficientPaymentError, ValidationError
from ..money import ZERO, monthly_interest, quantize, to_decimal

# Accepted spellings for each snapshot field, wire (camelCase) names first.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "debtId", "debt_id"),
    "name": ("name",),
    "current_balance": ("currentBalance", "current_balance", "balance"),
    "annual_interest_rate": (
        "annualInterestRate",
        "annual_interest_rate",
        "interestRate",
        "apr",
    ),
    "minimum_payment": ("minimumPayment", "minimum_payment"),
    "is_priority": ("isPriority", "is_priority"),
}


def _parse_amount(values: Mapping[str, Any], attr: str, debt_id: Hashable) -> Decimal:
    wire_name = _FIELD_ALIASES[attr][0]
    try:
        return to_decimal(values[attr])
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Debt {debt_id!r} has a non-numeric {wire_name}: {values[attr]!r}",
            field=wire_name,
            debt_id=debt_id,
        ) from exc


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True, slots=True)
class DebtSnapshot:
    """Point-in-time view of one debt, immutable for a simulation run."""

    id: Hashable
    name: str
    current_balance: Decimal
    annual_interest_rate: Decimal
    minimum_payment: Decimal
    is_priority: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DebtSnapshot":
        """Build a snapshot from a wire-style or snake_case mapping."""

        values: dict[str, Any] = {}
        for attr, aliases in _FIELD_ALIASES.items():
            for key in aliases:
                if key in data:
                    values[attr] = data[key]
                    break

        debt_id = values.get("id")
        for required in ("id", "current_balance", "annual_interest_rate", "minimum_payment"):
            if values.get(required) is None:
                raise ValidationError(
                    f"Debt is missing required field {_FIELD_ALIASES[required][0]!r}",
                    field=_FIELD_ALIASES[required][0],
                    debt_id=debt_id,
                )

        return cls(
            id=debt_id,
            name=str(values.get("name") or debt_id),
            current_balance=quantize(_parse_amount(values, "current_balance", debt_id)),
            annual_interest_rate=_parse_amount(values, "annual_interest_rate", debt_id),
            minimum_payment=quantize(_parse_amount(values, "minimum_payment", debt_id)),
            is_priority=_as_bool(values.get("is_priority", False)),
        )


SnapshotLike = Union[DebtSnapshot, Mapping[str, Any]]


@dataclass(slots=True)
class DebtSummary:
    """Aggregate figures for a set of active debts."""

    total_debt: Decimal
    total_minimum: Decimal
    weighted_average_rate: Decimal
    debt_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalDebt": float(self.total_debt),
            "totalMonthlyMinimum": float(self.total_minimum),
            "weightedAverageRate": float(self.weighted_average_rate),
            "debtCount": self.debt_count,
        }


def coerce_snapshot(debt: SnapshotLike) -> DebtSnapshot:
    """Return *debt* as a :class:`DebtSnapshot`, normalizing amounts to cents."""

    if isinstance(debt, DebtSnapshot):
        values = {
            "current_balance": debt.current_balance,
            "annual_interest_rate": debt.annual_interest_rate,
            "minimum_payment": debt.minimum_payment,
        }
        return DebtSnapshot(
            id=debt.id,
            name=debt.name,
            current_balance=quantize(_parse_amount(values, "current_balance", debt.id)),
            annual_interest_rate=_parse_amount(values, "annual_interest_rate", debt.id),
            minimum_payment=quantize(_parse_amount(values, "minimum_payment", debt.id)),
            is_priority=bool(debt.is_priority),
        )
    if isinstance(debt, Mapping):
        return DebtSnapshot.from_mapping(debt)
    raise TypeError(f"Unsupported debt input: {type(debt).__name__}")


def _check_non_negative(debt: DebtSnapshot) -> None:
    checks = (
        ("currentBalance", debt.current_balance),
        ("annualInterestRate", debt.annual_interest_rate),
        ("minimumPayment", debt.minimum_payment),
    )
    for field, value in checks:
        if value < 0:
            raise ValidationError(
                f"Debt {debt.id!r} has a negative {field}: {value}",
                field=field,
                debt_id=debt.id,
            )
    if debt.current_balance > 0 and debt.minimum_payment == 0:
        raise ValidationError(
            f"Debt {debt.id!r} has an outstanding balance but no minimum payment",
            field="minimumPayment",
            debt_id=debt.id,
        )


def total_monthly_payment(debts: Iterable[DebtSnapshot], extra_payment: Decimal) -> Decimal:
    """Sum of minimum payments plus the extra payment."""

    return sum((d.minimum_payment for d in debts), ZERO) + extra_payment


def normalize_debts(
    debts: Iterable[SnapshotLike], *, extra_payment: Decimal = ZERO
) -> list[DebtSnapshot]:
    """Validate inputs and return the debts that still carry a balance.

    Raises:
        ValidationError: negative amounts, duplicate ids, or a zero minimum
            on an outstanding balance.
        EmptyInputError: nothing left to simulate after dropping paid debts.
        InsufficientPaymentError: the monthly payment does not outpace the
            first month's interest.
    """

    if extra_payment < 0:
        raise ValidationError(
            f"Extra payment must be non-negative, got {extra_payment}",
            field="extraPayment",
        )

    active: list[DebtSnapshot] = []
    seen: set[Hashable] = set()
    for raw in debts:
        debt = coerce_snapshot(raw)
        _check_non_negative(debt)
        if debt.current_balance == 0:
            continue
        if debt.id in seen:
            raise ValidationError(
                f"Duplicate debt id {debt.id!r}", field="id", debt_id=debt.id
            )
        seen.add(debt.id)
        active.append(debt)

    if not active:
        raise EmptyInputError("No debts with an outstanding balance to simulate")

    first_month_interest = sum(
        (monthly_interest(d.current_balance, d.annual_interest_rate) for d in active), ZERO
    )
    payment = total_monthly_payment(active, extra_payment)
    if payment <= first_month_interest:
        raise InsufficientPaymentError(
            f"Monthly payment {payment} does not exceed first-month interest "
            f"{first_month_interest}; balances would never decrease"
        )
    return active


def summarize_debts(debts: Iterable[SnapshotLike]) -> DebtSummary:
    """Total balance, total minimum and balance-weighted average rate."""

    active = [d for d in (coerce_snapshot(raw) for raw in debts) if d.current_balance > 0]
    total_debt = sum((d.current_balance for d in active), ZERO)
    total_minimum = sum((d.minimum_payment for d in active), ZERO)
    if total_debt == 0:
        weighted = Decimal("0")
    else:
        weighted = sum(
            (d.current_balance * d.annual_interest_rate for d in active), Decimal("0")
        ) / total_debt
    return DebtSummary(
        total_debt=total_debt,
        total_minimum=total_minimum,
        weighted_average_rate=weighted.quantize(Decimal("0.0001")),
        debt_count=len(active),
    )


__all__ = [
    "DebtSnapshot",
    "DebtSummary",
    "SnapshotLike",
    "coerce_snapshot",
    "normalize_debts",
    "summarize_debts",
    "total_monthly_payment",
]
