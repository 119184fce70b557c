"""
Tracking lookup by customer-supplied order number.

Queries are normalized with the same rule the webhook reconciler uses, so
"#1001", "1001" and "1001.1" all find the record stored for order 1001.
"""

import logging
from typing import Callable

from tracklink.db import UnitOfWork
from tracklink.models.tracking import TrackingRecord
from tracklink.utils.order_number import normalize_order_number

logger = logging.getLogger(__name__)


class OrderNumberRequiredError(ValueError):
    """The lookup query is missing or blank."""


class TrackingNotFoundError(LookupError):
    """No tracking record exists for the normalized order key."""

    def __init__(self, order_key: str):
        self.order_key = order_key
        super().__init__(f"No tracking record for order key {order_key!r}")


def lookup_tracking(
    raw_query: str | None,
    uow_factory: Callable[[], UnitOfWork] | None = None,
) -> TrackingRecord:
    """
    Find the tracking record for an order number.

    A record whose tracking URL is empty or null is still returned; only a
    missing record is treated as not found.

    Args:
        raw_query: Order number as typed by the customer
        uow_factory: Factory for the unit of work (defaults to UnitOfWork)

    Returns:
        The stored TrackingRecord

    Raises:
        OrderNumberRequiredError: Query is None, empty or whitespace only
        TrackingNotFoundError: No record for the normalized key
    """
    if raw_query is None or not raw_query.strip():
        raise OrderNumberRequiredError("Order number is required.")

    order_key = normalize_order_number(raw_query)
    uow_factory = uow_factory or UnitOfWork

    with uow_factory() as uow:
        record = uow.tracking.get_by_order_key(order_key)

    if record is None:
        raise TrackingNotFoundError(order_key)

    return record
