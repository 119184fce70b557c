"""
Tracklink data models.

This package contains all Pydantic models for the Tracklink service.
"""

from tracklink.models.tracking import (
    ErrorResponse,
    TrackingHistoryEntry,
    TrackingRecord,
    TrackingUrlResponse,
)
from tracklink.models.webhook import (
    FulfillmentTopic,
    ReconcileResult,
    VerifiedWebhook,
    WebhookOutcome,
)

__all__ = [
    "ErrorResponse",
    "FulfillmentTopic",
    "ReconcileResult",
    "TrackingHistoryEntry",
    "TrackingRecord",
    "TrackingUrlResponse",
    "VerifiedWebhook",
    "WebhookOutcome",
]
