"""
Tests for tracking lookup by order number.
"""

import pytest

from tracklink.db import UnitOfWork
from tracklink.lookup import (
    OrderNumberRequiredError,
    TrackingNotFoundError,
    lookup_tracking,
)
from tracklink.webhooks.reconciler import reconcile_fulfillment


def test_finds_record_stored_by_webhook(database):
    reconcile_fulfillment(
        {"name": "1001.1", "tracking_url": "https://t.example/x"},
        "fulfillments/create",
    )

    record = lookup_tracking("#1001")

    assert record.tracking_url == "https://t.example/x"
    assert record.display_order_number == "#1001"


def test_not_found(database):
    with pytest.raises(TrackingNotFoundError) as exc_info:
        lookup_tracking("doesnotexist")

    assert exc_info.value.order_key == "doesnotexist"


@pytest.mark.parametrize("query", [None, "", " ", "\t\n"])
def test_blank_query(query):
    with pytest.raises(OrderNumberRequiredError):
        lookup_tracking(query)


def test_query_is_normalized_not_trimmed(database):
    with UnitOfWork() as uow:
        uow.tracking.upsert_merge(
            "1001", {"display_order_number": "#1001", "tracking_url": "https://a"}
        )
        uow.commit()

    with pytest.raises(TrackingNotFoundError):
        lookup_tracking(" 1001")


def test_store_error_propagates():
    # Database not initialized
    with pytest.raises(RuntimeError):
        lookup_tracking("1001")
