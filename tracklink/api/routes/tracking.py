"""
Tracking lookup route for the storefront.
"""

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from tracklink.lookup import (
    OrderNumberRequiredError,
    TrackingNotFoundError,
    lookup_tracking,
)
from tracklink.models.tracking import ErrorResponse, TrackingUrlResponse

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@router.get(
    "/get-tracking-url",
    response_model=TrackingUrlResponse,
    operation_id="getTrackingUrl",
    responses={
        400: {"model": ErrorResponse, "description": "Order number missing"},
        404: {"model": ErrorResponse, "description": "Order not found"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)
async def get_tracking_url(
    order_number: str | None = Query(default=None, alias="orderNumber"),
):
    """
    Look up the tracking URL for an order number.

    Accepts "#1001", "1001" or "1001.1" for the same order. The stored URL is
    returned as-is, including null when the order has no URL yet.

    Args:
        order_number: Order number from the orderNumber query parameter

    Returns:
        {"trackingUrl": ...}
    """
    try:
        record = lookup_tracking(order_number)
    except OrderNumberRequiredError:
        return _error(400, "Order number is required.")
    except TrackingNotFoundError as e:
        logger.info("Order not found for query %r (key %r)", order_number, e.order_key)
        return _error(404, "Order not found.")
    except Exception:
        logger.exception("Error fetching tracking URL for %r", order_number)
        return _error(500, "An internal server error occurred.")

    logger.info("Found tracking URL for %r", order_number)
    return TrackingUrlResponse(trackingUrl=record.tracking_url)
