"""
Tests for the webhook response policy.
"""

import pytest

from tracklink.models.webhook import WebhookOutcome
from tracklink.webhooks.policy import webhook_response, webhook_status_code


@pytest.mark.parametrize(
    "outcome, expected",
    [
        (WebhookOutcome.MISSING_HEADERS, 401),
        (WebhookOutcome.UNAUTHORIZED, 401),
        (WebhookOutcome.MALFORMED_PAYLOAD, 400),
        (WebhookOutcome.PROCESSED, 200),
        (WebhookOutcome.INCOMPLETE_EVENT, 200),
        (WebhookOutcome.PROCESSING_FAILED, 200),
    ],
)
def test_status_codes(outcome: WebhookOutcome, expected: int):
    assert webhook_status_code(outcome) == expected


def test_every_outcome_mapped():
    for outcome in WebhookOutcome:
        assert webhook_status_code(outcome) in (200, 400, 401)


def test_acknowledgment_has_empty_body():
    response = webhook_response(WebhookOutcome.PROCESSING_FAILED)
    assert response.status_code == 200
    assert response.body == b""


def test_rejection_has_plain_text_body():
    response = webhook_response(WebhookOutcome.UNAUTHORIZED)
    assert response.status_code == 401
    assert response.body == b"Unauthorized"
