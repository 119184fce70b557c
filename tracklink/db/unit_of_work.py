"""
Unit of Work pattern for transaction coordination.

Provides a clean way to work with the tracking repositories within a single transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from tracklink.db.connection import DatabaseConnection
from tracklink.db.repositories.tracking import (
    TrackingHistoryRepository,
    TrackingRepository,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class UnitOfWork:
    """
    Unit of Work for managing database transactions.

    Usage:
        with UnitOfWork() as uow:
            uow.tracking.upsert_merge("1001", {"tracking_url": url})
            uow.commit()  # Explicit commit

        # Auto-rollback on exception:
        with UnitOfWork() as uow:
            uow.tracking_history.append("1001", url, "fulfillments/create")
            raise Exception("Something went wrong")
            # Transaction is automatically rolled back
    """

    def __init__(self, session_factory: Callable[[], Session] | None = None):
        self._session_factory = session_factory or DatabaseConnection.get_session
        self._session: Session | None = None
        self._tracking: TrackingRepository | None = None
        self._tracking_history: TrackingHistoryRepository | None = None

    def __enter__(self) -> UnitOfWork:
        self._session = self._session_factory()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.rollback()
        self._close()
        return False  # Don't suppress exceptions

    @property
    def session(self) -> Session:
        """Get current session (raises if not in context)."""
        if self._session is None:
            raise RuntimeError("UnitOfWork must be used within a context manager")
        return self._session

    @property
    def tracking(self) -> TrackingRepository:
        """Tracking record repository for this unit of work."""
        if self._tracking is None:
            self._tracking = TrackingRepository(self.session)
        return self._tracking

    @property
    def tracking_history(self) -> TrackingHistoryRepository:
        """Tracking history repository for this unit of work."""
        if self._tracking_history is None:
            self._tracking_history = TrackingHistoryRepository(self.session)
        return self._tracking_history

    def commit(self):
        """Commit the current transaction."""
        self.session.commit()

    def rollback(self):
        """Rollback the current transaction."""
        self.session.rollback()

    def _close(self):
        if self._session is not None:
            self._session.close()
            self._session = None
            self._tracking = None
            self._tracking_history = None
