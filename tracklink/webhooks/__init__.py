"""
Shopify fulfillment webhook processing.

verify_webhook -> reconcile_fulfillment -> webhook_response
"""

from tracklink.webhooks.policy import webhook_response, webhook_status_code
from tracklink.webhooks.reconciler import (
    extract_order_label,
    extract_tracking_url,
    reconcile_fulfillment,
)
from tracklink.webhooks.verification import (
    MalformedWebhookPayloadError,
    MissingWebhookHeadersError,
    WebhookUnauthorizedError,
    WebhookVerificationError,
    verify_webhook,
)

__all__ = [
    "MalformedWebhookPayloadError",
    "MissingWebhookHeadersError",
    "WebhookUnauthorizedError",
    "WebhookVerificationError",
    "extract_order_label",
    "extract_tracking_url",
    "reconcile_fulfillment",
    "verify_webhook",
    "webhook_response",
    "webhook_status_code",
]
