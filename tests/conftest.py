"""Pytest configuration and shared fixtures for PayoffSage tests.

Provides snapshot builders, a fixed clock, and an isolated SQLite database for
the storage boundary tests.
"""

from __future__ import annotations

import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import Session, create_engine

from payoffsage.infra.database import create_session_factory, init_database
from payoffsage.models import Liability
from payoffsage.services.snapshots import DebtSnapshot

# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def clock_now() -> date:
    """Fixed 'today' so payoff dates are stable."""
    return date(2026, 1, 15)


def make_debt(
    debt_id=1,
    *,
    balance="1000.00",
    rate="18",
    minimum="25.00",
    name: str | None = None,
    is_priority: bool = False,
) -> DebtSnapshot:
    """Build a snapshot with Decimal fields from short literals."""
    return DebtSnapshot(
        id=debt_id,
        name=name or f"Debt {debt_id}",
        current_balance=Decimal(str(balance)),
        annual_interest_rate=Decimal(str(rate)),
        minimum_payment=Decimal(str(minimum)),
        is_priority=is_priority,
    )


@pytest.fixture
def debt_factory():
    """Factory for DebtSnapshot instances (see ``make_debt``)."""
    return make_debt


@pytest.fixture
def mixed_debts() -> list[DebtSnapshot]:
    """Three debts where balance order and rate order disagree."""
    return [
        make_debt(1, balance="500", rate="18", minimum="25"),
        make_debt(2, balance="2000", rate="10", minimum="60"),
        make_debt(3, balance="4000", rate="22", minimum="120"),
    ]


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    init_database(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Database session for a single test, closed afterwards."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory in the shape repositories expect."""
    return create_session_factory(db_engine)


@pytest.fixture
def liability_factory(db_session):
    """Factory for creating persisted liabilities.

    Returns:
        Callable: Function that creates and persists Liability instances
    """

    def _create_liability(
        name: str = "Test Debt",
        balance: float = 1000.00,
        apr: float = 18.0,
        minimum_payment: float = 25.00,
        is_priority: bool = False,
        user_id: int = 1,
    ) -> Liability:
        liability = Liability(
            user_id=user_id,
            name=name,
            balance=balance,
            apr=apr,
            minimum_payment=minimum_payment,
            is_priority=is_priority,
        )
        db_session.add(liability)
        db_session.commit()
        db_session.refresh(liability)
        return liability

    return _create_liability


# =============================================================================
# Helper Functions
# =============================================================================


def assert_money_equal(actual: Decimal, expected, tolerance: str = "0.01") -> None:
    """Assert two amounts match within one minor unit by default."""
    diff = abs(Decimal(actual) - Decimal(str(expected)))
    assert diff <= Decimal(tolerance), f"Expected {expected}, got {actual} (diff: {diff})"
