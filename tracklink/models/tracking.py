"""
Tracking record models.

A tracking record holds the latest tracking URL for one order key. History
entries are an append-only audit trail of every URL the record received.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TrackingRecord(BaseModel):
    """Latest tracking information for an order"""

    order_key: str = Field(description="Normalized order number (primary key)")
    display_order_number: str = Field(description="Order label, e.g. '#1001'")
    tracking_url: Optional[str] = Field(
        default=None, description="Carrier tracking URL, null until known"
    )
    shop_domain: Optional[str] = Field(
        default=None, description="Shop that sent the latest fulfillment event"
    )
    created_at: Optional[datetime] = Field(
        default=None, description="When the record was first written"
    )
    updated_at: Optional[datetime] = Field(
        default=None, description="When the record was last written"
    )


class TrackingHistoryEntry(BaseModel):
    """One tracking URL received for an order"""

    id: Optional[int] = Field(default=None, description="Database row ID")
    order_key: str = Field(description="Normalized order number")
    tracking_url: Optional[str] = Field(
        default=None, description="Tracking URL carried by the event"
    )
    source_event: str = Field(description="Webhook topic that produced the entry")
    recorded_at: datetime = Field(description="When the entry was appended")


# =============================================================================
# API Response Models
# =============================================================================


class TrackingUrlResponse(BaseModel):
    """Response for the tracking URL lookup"""

    trackingUrl: Optional[str] = Field(
        description="Stored tracking URL (may be null if not yet available)"
    )


class ErrorResponse(BaseModel):
    """Error body returned by the lookup endpoint"""

    error: str = Field(description="Human-readable error message")
