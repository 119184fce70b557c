"""
Tracking repositories for database operations.

Handles the merge-upsert of tracking records and the append-only
tracking history.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Table, select

from tracklink.db.repositories.base import BaseRepository
from tracklink.db.tables import tracking_history, tracking_records
from tracklink.models.tracking import TrackingHistoryEntry, TrackingRecord
from tracklink.utils.order_number import display_order_number

# Fields a merge write may set; anything else is preserved as stored
MERGEABLE_FIELDS = frozenset({"display_order_number", "tracking_url", "shop_domain"})


class TrackingRepository(BaseRepository[TrackingRecord]):
    """Repository for TrackingRecord operations keyed by order key."""

    @property
    def table(self) -> Table:
        return tracking_records

    def _row_to_model(self, row: Any) -> TrackingRecord:
        """Convert database row to TrackingRecord model."""
        return TrackingRecord(
            order_key=row.order_key,
            display_order_number=row.display_order_number,
            tracking_url=row.tracking_url,
            shop_domain=row.shop_domain,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _model_to_dict(self, model: TrackingRecord) -> dict:
        """Convert TrackingRecord model to database dict."""
        now = datetime.now(timezone.utc)
        return {
            "order_key": model.order_key,
            "display_order_number": model.display_order_number,
            "tracking_url": model.tracking_url,
            "shop_domain": model.shop_domain,
            "created_at": model.created_at or now,
            "updated_at": model.updated_at or now,
        }

    def get_by_order_key(self, order_key: str) -> TrackingRecord | None:
        """
        Get tracking record by normalized order key.

        Args:
            order_key: Normalized order number (e.g., "1001")

        Returns:
            TrackingRecord or None if not found
        """
        return self.get(order_key)

    def upsert_merge(self, order_key: str, fields: dict[str, Any]) -> TrackingRecord:
        """
        Create or merge-update the record for an order key.

        Field semantics:
        - Supplied fields overwrite the stored values unconditionally
        - Fields not supplied keep their stored values
        - ``updated_at`` is always set to now
        - ``created_at`` is set on insert only
        - History rows are never touched

        A single call is one INSERT ... ON CONFLICT DO UPDATE statement, so it
        is atomic. Two concurrent calls for the same key apply in either order.

        Args:
            order_key: Normalized order number
            fields: Subset of MERGEABLE_FIELDS to write. When a new record is
                created without ``display_order_number``, it is derived from
                the order key ("#" + key)

        Returns:
            The record as stored after the write

        Raises:
            ValueError: If fields contains names outside MERGEABLE_FIELDS
        """
        unknown = set(fields) - MERGEABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot merge unknown fields: {sorted(unknown)}")

        now = datetime.now(timezone.utc)
        update_data = {**fields, "updated_at": now}
        insert_data = {**update_data, "order_key": order_key, "created_at": now}
        # NOT NULL is checked on the proposed row before ON CONFLICT applies
        insert_data.setdefault("display_order_number", display_order_number(order_key))

        insert = self._upsert_insert()
        stmt = (
            insert(self.table)
            .values(**insert_data)
            .on_conflict_do_update(index_elements=["order_key"], set_=update_data)
        )
        self.session.execute(stmt)

        record = self.get_by_order_key(order_key)
        assert record is not None
        return record


class TrackingHistoryRepository(BaseRepository[TrackingHistoryEntry]):
    """Repository for the append-only tracking history."""

    @property
    def table(self) -> Table:
        return tracking_history

    def _row_to_model(self, row: Any) -> TrackingHistoryEntry:
        return TrackingHistoryEntry(
            id=row.id,
            order_key=row.order_key,
            tracking_url=row.tracking_url,
            source_event=row.source_event,
            recorded_at=row.recorded_at,
        )

    def _model_to_dict(self, model: TrackingHistoryEntry) -> dict:
        # id is assigned by the database
        return {
            "order_key": model.order_key,
            "tracking_url": model.tracking_url,
            "source_event": model.source_event,
            "recorded_at": model.recorded_at,
        }

    def append(
        self,
        order_key: str,
        tracking_url: str | None,
        source_event: str,
        recorded_at: datetime | None = None,
    ) -> TrackingHistoryEntry:
        """
        Append one history entry for an order.

        Args:
            order_key: Normalized order number
            tracking_url: Tracking URL carried by the event
            source_event: Webhook topic (e.g., "fulfillments/update")
            recorded_at: Entry timestamp (defaults to now)

        Returns:
            The stored entry
        """
        entry = TrackingHistoryEntry(
            order_key=order_key,
            tracking_url=tracking_url,
            source_event=source_event,
            recorded_at=recorded_at or datetime.now(timezone.utc),
        )
        return self.create(entry)

    def list_for_order(self, order_key: str) -> list[TrackingHistoryEntry]:
        """
        List history entries for an order, oldest first.

        Args:
            order_key: Normalized order number

        Returns:
            History entries in insertion order
        """
        stmt = (
            select(self.table)
            .where(self.table.c.order_key == order_key)
            .order_by(self.table.c.recorded_at.asc(), self.table.c.id.asc())
        )
        result = self.session.execute(stmt)
        return [self._row_to_model(row) for row in result.fetchall()]
