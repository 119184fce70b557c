"""
Shopify webhook verification.

Security contract:
- The HMAC is computed over the exact raw body bytes, before any decoding
- Missing headers or an empty body are rejected before any digest is computed
- Digests are compared with hmac.compare_digest() (constant time, case-sensitive)
- A missing shared secret rejects every webhook (fail closed)
- The body is only parsed after the digest matches
"""

import hmac
import json
import logging
from typing import Mapping

from tracklink.models.webhook import VerifiedWebhook, WebhookOutcome
from tracklink.utils.hash import compute_hmac_sha256_base64

logger = logging.getLogger(__name__)

HMAC_HEADER = "X-Shopify-Hmac-Sha256"
TOPIC_HEADER = "X-Shopify-Topic"
SHOP_DOMAIN_HEADER = "X-Shopify-Shop-Domain"

REQUIRED_HEADERS = (HMAC_HEADER, TOPIC_HEADER, SHOP_DOMAIN_HEADER)


class WebhookVerificationError(Exception):
    """Base class for webhooks that must not be processed."""

    outcome: WebhookOutcome = WebhookOutcome.UNAUTHORIZED


class MissingWebhookHeadersError(WebhookVerificationError):
    """A required header or the request body is absent."""

    outcome = WebhookOutcome.MISSING_HEADERS

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required webhook data: {', '.join(missing)}")


class WebhookUnauthorizedError(WebhookVerificationError):
    """The HMAC header does not match the body."""

    outcome = WebhookOutcome.UNAUTHORIZED


class MalformedWebhookPayloadError(WebhookVerificationError):
    """The HMAC matched but the body is not valid JSON."""

    outcome = WebhookOutcome.MALFORMED_PAYLOAD


def get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup that works for plain dicts too."""
    value = headers.get(name)
    if value is not None:
        return value

    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def verify_webhook(
    raw_body: bytes, headers: Mapping[str, str], secret: bytes
) -> VerifiedWebhook:
    """
    Verify a Shopify webhook and decode its body.

    Args:
        raw_body: Request body exactly as received on the wire
        headers: Request headers (names matched case-insensitively)
        secret: Shared webhook secret

    Returns:
        VerifiedWebhook with topic, shop domain and the decoded JSON payload

    Raises:
        MissingWebhookHeadersError: A required header or the body is absent
        WebhookUnauthorizedError: The digest does not match, or no secret is set
        MalformedWebhookPayloadError: The digest matches but the body is not JSON
    """
    supplied_hmac = get_header(headers, HMAC_HEADER)
    topic = get_header(headers, TOPIC_HEADER)
    shop_domain = get_header(headers, SHOP_DOMAIN_HEADER)

    missing = [
        name
        for name, value in zip(REQUIRED_HEADERS, (supplied_hmac, topic, shop_domain))
        if not value
    ]
    if not raw_body:
        missing.append("body")
    if missing:
        raise MissingWebhookHeadersError(missing)

    if not secret:
        logger.error("SHOPIFY_WEBHOOK_SECRET not set, rejecting webhook")
        raise WebhookUnauthorizedError("Webhook secret is not configured")

    expected_hmac = compute_hmac_sha256_base64(secret, raw_body)
    if not hmac.compare_digest(
        expected_hmac.encode("ascii"), supplied_hmac.encode("utf-8")
    ):
        raise WebhookUnauthorizedError("HMAC mismatch")

    try:
        payload = json.loads(raw_body)
    except ValueError as e:
        raise MalformedWebhookPayloadError(f"Invalid JSON body: {e}") from e

    return VerifiedWebhook(topic=topic, shop_domain=shop_domain, payload=payload)
