"""Tests for debt snapshot parsing, validation and summaries."""

from __future__ import annotations

from decimal import Decimal

import pytest

from payoffsage.errors import EmptyInputError, InsufficientPaymentError, ValidationError
from payoffsage.services.snapshots import DebtSnapshot, normalize_debts, summarize_debts


class TestFromMapping:
    def test_wire_names(self):
        debt = DebtSnapshot.from_mapping(
            {
                "id": "card-1",
                "name": "Visa",
                "currentBalance": "1234.567",
                "annualInterestRate": 19.99,
                "minimumPayment": 35,
                "isPriority": "true",
            }
        )

        assert debt.id == "card-1"
        assert debt.name == "Visa"
        assert debt.current_balance == Decimal("1234.57")
        assert debt.annual_interest_rate == Decimal("19.99")
        assert debt.minimum_payment == Decimal("35.00")
        assert debt.is_priority is True

    def test_snake_case_and_interest_rate_alias(self):
        debt = DebtSnapshot.from_mapping(
            {"id": 7, "current_balance": 100, "interestRate": 5, "minimum_payment": 10}
        )

        assert debt.annual_interest_rate == Decimal("5")
        assert debt.name == "7"
        assert debt.is_priority is False

    def test_missing_field_names_it(self):
        with pytest.raises(ValidationError) as excinfo:
            DebtSnapshot.from_mapping({"id": 1, "currentBalance": 100, "annualInterestRate": 5})
        assert excinfo.value.field == "minimumPayment"
        assert excinfo.value.debt_id == 1

    def test_non_numeric_amount(self):
        with pytest.raises(ValidationError) as excinfo:
            DebtSnapshot.from_mapping(
                {"id": 1, "currentBalance": "lots", "annualInterestRate": 5, "minimumPayment": 10}
            )
        assert excinfo.value.field == "currentBalance"


class TestNormalizeDebts:
    def test_filters_paid_off_debts(self, debt_factory):
        debts = [
            debt_factory(1, balance="0", minimum="0"),
            debt_factory(2, balance="500", minimum="50"),
        ]

        active = normalize_debts(debts)

        assert [d.id for d in active] == [2]

    def test_accepts_mappings(self):
        active = normalize_debts(
            [{"id": 1, "currentBalance": 100, "annualInterestRate": 12, "minimumPayment": 20}]
        )
        assert active[0].current_balance == Decimal("100.00")

    def test_empty_list_raises(self):
        with pytest.raises(EmptyInputError):
            normalize_debts([])

    def test_all_zero_balances_raise(self, debt_factory):
        with pytest.raises(EmptyInputError):
            normalize_debts([debt_factory(1, balance="0", minimum="0"), debt_factory(2, balance="0.00", minimum="0")])

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"balance": "-1"}, "currentBalance"),
            ({"rate": "-0.5"}, "annualInterestRate"),
            ({"minimum": "-25"}, "minimumPayment"),
        ],
    )
    def test_negative_values_raise(self, debt_factory, kwargs, field):
        with pytest.raises(ValidationError) as excinfo:
            normalize_debts([debt_factory(9, **kwargs)])
        assert excinfo.value.field == field
        assert excinfo.value.debt_id == 9

    def test_zero_minimum_on_open_balance_raises(self, debt_factory):
        with pytest.raises(ValidationError) as excinfo:
            normalize_debts([debt_factory(1, balance="100", minimum="0")], extra_payment=Decimal("50"))
        assert excinfo.value.field == "minimumPayment"

    def test_negative_extra_payment_raises(self, debt_factory):
        with pytest.raises(ValidationError) as excinfo:
            normalize_debts([debt_factory(1)], extra_payment=Decimal("-1"))
        assert excinfo.value.field == "extraPayment"

    def test_duplicate_ids_raise(self, debt_factory):
        with pytest.raises(ValidationError) as excinfo:
            normalize_debts([debt_factory(1), debt_factory(1, balance="200")])
        assert excinfo.value.field == "id"

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"current_balance": None}, "currentBalance"),
            ({"current_balance": "abc"}, "currentBalance"),
            ({"current_balance": Decimal("NaN")}, "currentBalance"),
            ({"annual_interest_rate": "high"}, "annualInterestRate"),
            ({"minimum_payment": float("inf")}, "minimumPayment"),
        ],
    )
    def test_malformed_snapshot_amounts_raise(self, kwargs, field):
        values = {
            "id": 7,
            "name": "Loan",
            "current_balance": Decimal("500"),
            "annual_interest_rate": Decimal("6"),
            "minimum_payment": Decimal("50"),
        }
        values.update(kwargs)
        with pytest.raises(ValidationError) as excinfo:
            normalize_debts([DebtSnapshot(**values)])
        assert excinfo.value.field == field
        assert excinfo.value.debt_id == 7

    def test_payments_equal_to_interest_raise(self, debt_factory):
        # 12.00 + 12.00 of interest against 24.00 of minimums
        debts = [
            debt_factory(1, balance="1200", rate="12", minimum="12"),
            debt_factory(2, balance="600", rate="24", minimum="12"),
        ]
        with pytest.raises(InsufficientPaymentError):
            normalize_debts(debts)

    def test_extra_payment_can_cover_interest(self, debt_factory):
        debts = [debt_factory(1, balance="1200", rate="12", minimum="12")]
        assert len(normalize_debts(debts, extra_payment=Decimal("0.01"))) == 1


class TestSummarizeDebts:
    def test_weighted_average_rate(self, debt_factory):
        summary = summarize_debts(
            [
                debt_factory(1, balance="1000", rate="10", minimum="25"),
                debt_factory(2, balance="3000", rate="20", minimum="75"),
                debt_factory(3, balance="0", rate="30", minimum="0"),
            ]
        )

        assert summary.total_debt == Decimal("4000.00")
        assert summary.total_minimum == Decimal("100.00")
        assert summary.weighted_average_rate == Decimal("17.5000")
        assert summary.debt_count == 2
        assert summary.to_dict() == {
            "totalDebt": 4000.0,
            "totalMonthlyMinimum": 100.0,
            "weightedAverageRate": 17.5,
            "debtCount": 2,
        }

    def test_empty_summary(self):
        summary = summarize_debts([])
        assert summary.debt_count == 0
        assert summary.weighted_average_rate == Decimal("0")
