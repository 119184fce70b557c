"""
Fulfillment reconciliation.

Applies a verified fulfillment event to the tracking store: extracts the
order label and tracking URL, normalizes the label to an order key, and
merge-upserts the tracking record. Never raises; every failure becomes a
ReconcileResult so the webhook boundary can acknowledge it.
"""

import logging
from typing import Any, Callable

from tracklink.db import UnitOfWork
from tracklink.models.webhook import FulfillmentTopic, ReconcileResult, WebhookOutcome
from tracklink.utils.order_number import display_order_number, normalize_order_number

logger = logging.getLogger(__name__)

ORDER_LABEL_FIELD = "name"

KNOWN_TOPICS = frozenset(topic.value for topic in FulfillmentTopic)


def _first_string(value: Any) -> str | None:
    if isinstance(value, list) and value:
        return _string(value[0])
    return None


def _string(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


# Payload shapes carrying a tracking URL, in priority order
TRACKING_URL_SHAPES: tuple[tuple[str, Callable[[Any], str | None]], ...] = (
    ("tracking_urls", _first_string),
    ("tracking_url", _string),
)


def extract_order_label(payload: Any) -> str | None:
    """
    Get the raw order label (e.g. "#1001.1") from a fulfillment payload.

    Args:
        payload: Decoded webhook body

    Returns:
        The label, or None if absent or empty
    """
    if not isinstance(payload, dict):
        return None

    label = payload.get(ORDER_LABEL_FIELD)
    if isinstance(label, int) and not isinstance(label, bool):
        return str(label)
    return _string(label)


def extract_tracking_url(payload: Any) -> str | None:
    """
    Get the tracking URL from a fulfillment payload.

    Tries ``tracking_urls[0]`` first, then ``tracking_url``.

    Args:
        payload: Decoded webhook body

    Returns:
        The first URL found, or None
    """
    if not isinstance(payload, dict):
        return None

    for field, extract in TRACKING_URL_SHAPES:
        url = extract(payload.get(field))
        if url is not None:
            return url
    return None


def reconcile_fulfillment(
    payload: Any,
    topic: str,
    shop_domain: str | None = None,
    uow_factory: Callable[[], UnitOfWork] | None = None,
) -> ReconcileResult:
    """
    Upsert the tracking record for a verified fulfillment event.

    Create and update topics are handled identically; the topic is only
    recorded in the history entry. Topics outside FulfillmentTopic are logged
    and still processed.

    Args:
        payload: Decoded webhook body
        topic: Webhook topic (X-Shopify-Topic)
        shop_domain: Originating shop (X-Shopify-Shop-Domain)
        uow_factory: Factory for the unit of work (defaults to UnitOfWork)

    Returns:
        ReconcileResult classified as processed, incomplete_event or
        processing_failed
    """
    uow_factory = uow_factory or UnitOfWork
    order_key: str | None = None
    tracking_url: str | None = None

    if topic not in KNOWN_TOPICS:
        logger.warning("Unexpected webhook topic %r, processing as a fulfillment", topic)

    try:
        label = extract_order_label(payload)
        tracking_url = extract_tracking_url(payload)
        order_key = normalize_order_number(label) if label is not None else None

        if not order_key or tracking_url is None:
            logger.info(
                "Skipping incomplete fulfillment event (topic=%s, label=%r, tracking_url=%r)",
                topic,
                label,
                tracking_url,
            )
            return ReconcileResult(
                outcome=WebhookOutcome.INCOMPLETE_EVENT,
                order_key=order_key or None,
                tracking_url=tracking_url,
            )

        fields = {
            "display_order_number": display_order_number(label),
            "tracking_url": tracking_url,
        }
        if shop_domain:
            fields["shop_domain"] = shop_domain

        with uow_factory() as uow:
            uow.tracking.upsert_merge(order_key, fields)
            uow.commit()

        logger.info("Stored tracking URL for order %s (%s)", order_key, topic)

    except Exception as e:
        logger.exception("Failed to reconcile fulfillment event (topic=%s)", topic)
        return ReconcileResult(
            outcome=WebhookOutcome.PROCESSING_FAILED,
            order_key=order_key,
            tracking_url=tracking_url,
            error=str(e),
        )

    history_recorded = _append_history(order_key, tracking_url, topic, uow_factory)

    return ReconcileResult(
        outcome=WebhookOutcome.PROCESSED,
        order_key=order_key,
        tracking_url=tracking_url,
        history_recorded=history_recorded,
    )


def _append_history(
    order_key: str,
    tracking_url: str,
    topic: str,
    uow_factory: Callable[[], UnitOfWork],
) -> bool:
    """Best-effort history append; failures are logged and reported as False."""
    try:
        with uow_factory() as uow:
            uow.tracking_history.append(order_key, tracking_url, topic)
            uow.commit()
        return True
    except Exception as e:
        logger.warning("Failed to append tracking history for %s: %s", order_key, e)
        return False
