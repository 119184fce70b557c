"""
Shopify fulfillment webhook routes.

Both fulfillment topics go through the same handler: verify the HMAC over the
raw body, reconcile the event, and answer according to the webhook policy.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from tracklink.api.dependencies import get_settings
from tracklink.config import Settings
from tracklink.webhooks import (
    WebhookVerificationError,
    reconcile_fulfillment,
    verify_webhook,
    webhook_response,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/webhooks/fulfillments/create",
    operation_id="handleFulfillmentCreated",
    response_class=Response,
)
@router.post(
    "/webhooks/fulfillments/update",
    operation_id="handleFulfillmentUpdated",
    response_class=Response,
)
async def handle_fulfillment_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Response:
    """
    Receive a Shopify fulfillment webhook.

    Returns:
        401 if headers are missing or the HMAC does not match,
        400 if the body is not JSON,
        200 with an empty body otherwise (including processing failures)
    """
    raw_body = await request.body()

    try:
        webhook = verify_webhook(raw_body, request.headers, settings.webhook_secret_bytes)
    except WebhookVerificationError as e:
        logger.warning(
            "Webhook verification failed: %s",
            e,
            extra={"json_fields": {"outcome": e.outcome.value, "path": request.url.path}},
        )
        return webhook_response(e.outcome)

    result = reconcile_fulfillment(
        webhook.payload, webhook.topic, shop_domain=webhook.shop_domain
    )

    logger.info(
        "Fulfillment webhook handled: %s",
        result.outcome.value,
        extra={
            "json_fields": {
                "outcome": result.outcome.value,
                "topic": webhook.topic,
                "shop_domain": webhook.shop_domain,
                "order_key": result.order_key,
            }
        },
    )
    return webhook_response(result.outcome)
