"""
Webhook models.

Classifications for inbound Shopify webhooks and the results of verifying
and reconciling them.
"""

from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, Field


class FulfillmentTopic(StrEnum):
    """Shopify fulfillment webhook topics"""

    CREATE = "fulfillments/create"
    UPDATE = "fulfillments/update"


class WebhookOutcome(StrEnum):
    """How an inbound webhook was classified"""

    MISSING_HEADERS = "missing_headers"  # Required header or body absent
    UNAUTHORIZED = "unauthorized"  # HMAC mismatch
    MALFORMED_PAYLOAD = "malformed_payload"  # Valid HMAC, invalid JSON
    PROCESSED = "processed"  # Tracking record written
    INCOMPLETE_EVENT = "incomplete_event"  # No order label or tracking URL
    PROCESSING_FAILED = "processing_failed"  # Store or unexpected error


class VerifiedWebhook(BaseModel):
    """A webhook whose HMAC matched, with its parsed JSON body"""

    topic: str = Field(description="X-Shopify-Topic header value")
    shop_domain: str = Field(description="X-Shopify-Shop-Domain header value")
    payload: Any = Field(description="Decoded JSON body")


class ReconcileResult(BaseModel):
    """Result of applying a verified fulfillment event to the store"""

    outcome: WebhookOutcome = Field(description="Processing classification")
    order_key: Optional[str] = Field(default=None, description="Normalized order key")
    tracking_url: Optional[str] = Field(
        default=None, description="Tracking URL extracted from the payload"
    )
    history_recorded: bool = Field(
        default=False, description="Whether a history entry was appended"
    )
    error: Optional[str] = Field(default=None, description="Failure detail")
