"""
Webhook response policy.

Sender errors (bad signature, bad JSON) are reported precisely. Anything that
happens after a webhook is verified is acknowledged with 200 so Shopify does
not redeliver it during a downstream outage.
"""

from fastapi import Response, status
from fastapi.responses import PlainTextResponse

from tracklink.models.webhook import WebhookOutcome

WEBHOOK_STATUS_CODES: dict[WebhookOutcome, int] = {
    WebhookOutcome.MISSING_HEADERS: status.HTTP_401_UNAUTHORIZED,
    WebhookOutcome.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    WebhookOutcome.MALFORMED_PAYLOAD: status.HTTP_400_BAD_REQUEST,
    WebhookOutcome.PROCESSED: status.HTTP_200_OK,
    WebhookOutcome.INCOMPLETE_EVENT: status.HTTP_200_OK,
    WebhookOutcome.PROCESSING_FAILED: status.HTTP_200_OK,
}

_REJECTION_BODIES: dict[int, str] = {
    status.HTTP_401_UNAUTHORIZED: "Unauthorized",
    status.HTTP_400_BAD_REQUEST: "Bad Request",
}


def webhook_status_code(outcome: WebhookOutcome) -> int:
    """HTTP status returned to the webhook sender for an outcome."""
    return WEBHOOK_STATUS_CODES[outcome]


def webhook_response(outcome: WebhookOutcome) -> Response:
    """
    Build the HTTP response for a webhook outcome.

    Acknowledgments have an empty body; rejections carry a short plain-text
    reason.
    """
    status_code = webhook_status_code(outcome)
    if status_code in _REJECTION_BODIES:
        return PlainTextResponse(_REJECTION_BODIES[status_code], status_code=status_code)
    return Response(status_code=status_code)
