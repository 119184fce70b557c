"""
SQLAlchemy Table definitions for the tracking store.

Uses SQLAlchemy Core (not ORM) with portable column types so the same
schema runs on Cloud SQL PostgreSQL and on SQLite for local development.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

# =============================================================================
# TABLE: tracking_records
# =============================================================================

tracking_records = Table(
    "tracking_records",
    metadata,
    Column("order_key", String(255), primary_key=True),
    Column("display_order_number", String(256), nullable=False),
    Column("tracking_url", Text),
    Column("shop_domain", String(255)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

# =============================================================================
# TABLE: tracking_history (append-only)
# =============================================================================

tracking_history = Table(
    "tracking_history",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "order_key",
        String(255),
        ForeignKey("tracking_records.order_key"),
        nullable=False,
    ),
    Column("tracking_url", Text),
    Column("source_event", String(100), nullable=False),
    Column("recorded_at", DateTime(timezone=True), nullable=False),
)

Index("idx_tracking_history_order_key", tracking_history.c.order_key)
