"""SQLModel implementation of the liability repository."""

from __future__ import annotations

from typing import Callable, ContextManager

from sqlmodel import Session, select

from ...models.liability import Liability
from ...services.liabilities import snapshots_from_liabilities
from ...services.snapshots import DebtSnapshot


class SQLModelLiabilityRepository:
    """Reads liabilities and hands them to the engine as snapshots."""

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_active(self, *, user_id: int) -> list[Liability]:
        """List liabilities with non-zero balances."""
        with self.session_factory() as session:
            statement = (
                select(Liability)
                .where(Liability.user_id == user_id)
                .where(Liability.balance > 0)
                .order_by(Liability.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, liability: Liability, *, user_id: int) -> Liability:
        """Create a new liability."""
        with self.session_factory() as session:
            liability.user_id = user_id
            session.add(liability)
            session.commit()
            session.refresh(liability)
            return liability

    def list_snapshots(self, *, user_id: int) -> list[DebtSnapshot]:
        """Active liabilities frozen as engine inputs."""
        return snapshots_from_liabilities(self.list_active(user_id=user_id))
