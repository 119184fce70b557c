"""
Tests for Shopify webhook verification.
"""

from unittest.mock import patch

import pytest

from tracklink.models.webhook import WebhookOutcome
from tracklink.webhooks.verification import (
    HMAC_HEADER,
    SHOP_DOMAIN_HEADER,
    TOPIC_HEADER,
    MalformedWebhookPayloadError,
    MissingWebhookHeadersError,
    WebhookUnauthorizedError,
    get_header,
    verify_webhook,
)

SECRET = b"test-webhook-secret"
BODY = b'{"name": "#1001.1", "tracking_url": "https://t.example/x"}'


@pytest.fixture
def headers(sign) -> dict[str, str]:
    return {
        HMAC_HEADER: sign(BODY),
        TOPIC_HEADER: "fulfillments/create",
        SHOP_DOMAIN_HEADER: "example-shop.myshopify.com",
    }


class TestVerifyWebhook:
    """Tests for verify_webhook function."""

    def test_valid_signature(self, headers: dict[str, str]):
        webhook = verify_webhook(BODY, headers, SECRET)

        assert webhook.topic == "fulfillments/create"
        assert webhook.shop_domain == "example-shop.myshopify.com"
        assert webhook.payload == {
            "name": "#1001.1",
            "tracking_url": "https://t.example/x",
        }

    def test_header_names_case_insensitive(self, headers: dict[str, str]):
        lowered = {k.lower(): v for k, v in headers.items()}
        webhook = verify_webhook(BODY, lowered, SECRET)
        assert webhook.topic == "fulfillments/create"

    def test_single_byte_mutation_rejected(self, headers: dict[str, str]):
        mutated = BODY.replace(b"1001", b"1002")
        with pytest.raises(WebhookUnauthorizedError):
            verify_webhook(mutated, headers, SECRET)

    def test_reserialized_body_rejected(self, headers: dict[str, str]):
        # Same JSON, different whitespace
        compact = b'{"name":"#1001.1","tracking_url":"https://t.example/x"}'
        with pytest.raises(WebhookUnauthorizedError):
            verify_webhook(compact, headers, SECRET)

    def test_wrong_secret_rejected(self, headers: dict[str, str]):
        with pytest.raises(WebhookUnauthorizedError) as exc_info:
            verify_webhook(BODY, headers, b"other-secret")
        assert exc_info.value.outcome == WebhookOutcome.UNAUTHORIZED

    def test_digest_compared_case_sensitively(self, headers: dict[str, str]):
        headers[HMAC_HEADER] = headers[HMAC_HEADER].swapcase()
        with pytest.raises(WebhookUnauthorizedError):
            verify_webhook(BODY, headers, SECRET)

    def test_non_ascii_digest_rejected(self, headers: dict[str, str]):
        headers[HMAC_HEADER] = "ünïcödé"
        with pytest.raises(WebhookUnauthorizedError):
            verify_webhook(BODY, headers, SECRET)

    def test_missing_secret_rejected(self, headers: dict[str, str]):
        with pytest.raises(WebhookUnauthorizedError):
            verify_webhook(BODY, headers, b"")

    @pytest.mark.parametrize("missing", [HMAC_HEADER, TOPIC_HEADER, SHOP_DOMAIN_HEADER])
    def test_missing_header_rejected_without_digest(
        self, headers: dict[str, str], missing: str
    ):
        del headers[missing]

        with patch(
            "tracklink.webhooks.verification.compute_hmac_sha256_base64"
        ) as mock_hmac:
            with pytest.raises(MissingWebhookHeadersError) as exc_info:
                verify_webhook(BODY, headers, SECRET)

        mock_hmac.assert_not_called()
        assert exc_info.value.missing == [missing]
        assert exc_info.value.outcome == WebhookOutcome.MISSING_HEADERS

    def test_empty_header_value_treated_as_missing(self, headers: dict[str, str]):
        headers[TOPIC_HEADER] = ""
        with pytest.raises(MissingWebhookHeadersError):
            verify_webhook(BODY, headers, SECRET)

    def test_empty_body_rejected_without_digest(self, headers: dict[str, str]):
        with patch(
            "tracklink.webhooks.verification.compute_hmac_sha256_base64"
        ) as mock_hmac:
            with pytest.raises(MissingWebhookHeadersError) as exc_info:
                verify_webhook(b"", headers, SECRET)

        mock_hmac.assert_not_called()
        assert exc_info.value.missing == ["body"]

    def test_invalid_json_with_valid_digest(self, sign, headers: dict[str, str]):
        body = b"{not json"
        headers[HMAC_HEADER] = sign(body)

        with pytest.raises(MalformedWebhookPayloadError) as exc_info:
            verify_webhook(body, headers, SECRET)

        assert exc_info.value.outcome == WebhookOutcome.MALFORMED_PAYLOAD

    def test_invalid_utf8_with_valid_digest(self, sign, headers: dict[str, str]):
        body = b'{"name": "\xff"}'
        headers[HMAC_HEADER] = sign(body)

        with pytest.raises(MalformedWebhookPayloadError):
            verify_webhook(body, headers, SECRET)

    def test_invalid_json_with_bad_digest_is_unauthorized(
        self, headers: dict[str, str]
    ):
        with pytest.raises(WebhookUnauthorizedError):
            verify_webhook(b"{not json", headers, SECRET)


class TestGetHeader:
    """Tests for get_header function."""

    def test_exact_match(self):
        assert get_header({"X-Shopify-Topic": "a"}, "X-Shopify-Topic") == "a"

    def test_case_insensitive(self):
        assert get_header({"x-shopify-topic": "a"}, "X-Shopify-Topic") == "a"

    def test_absent(self):
        assert get_header({}, "X-Shopify-Topic") is None
