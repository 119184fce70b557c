"""
pytest configuration and fixtures.

Loads environment variables from .env file for all tests and provides an
in-memory SQLite tracking store plus helpers for signing webhook bodies.
"""

import json
from pathlib import Path
from typing import Callable

import pytest
from dotenv import load_dotenv

from tracklink.db import DatabaseConnection, UnitOfWork
from tracklink.utils.hash import compute_hmac_sha256_base64

WEBHOOK_SECRET = "test-webhook-secret"
SHOP_DOMAIN = "example-shop.myshopify.com"


def pytest_configure(config):
    """Load .env file before running tests"""
    project_root = Path(__file__).parent.parent
    env_file = project_root / ".env"

    if env_file.exists():
        load_dotenv(env_file)


@pytest.fixture
def database():
    """Initialize a fresh in-memory SQLite store for one test."""
    DatabaseConnection.initialize(database_url="sqlite+pysqlite:///:memory:")
    DatabaseConnection.create_tables()
    yield DatabaseConnection
    DatabaseConnection.close()


@pytest.fixture
def uow(database) -> UnitOfWork:
    """Unit of work bound to the test store."""
    return UnitOfWork()


@pytest.fixture
def webhook_secret() -> str:
    return WEBHOOK_SECRET


@pytest.fixture
def sign() -> Callable[..., str]:
    """Compute the X-Shopify-Hmac-Sha256 value Shopify would send."""

    def _sign(body: bytes, secret: str = WEBHOOK_SECRET) -> str:
        return compute_hmac_sha256_base64(secret.encode("utf-8"), body)

    return _sign


@pytest.fixture
def webhook_headers(sign) -> Callable[..., dict[str, str]]:
    """Build the full Shopify header set for a body."""

    def _headers(body: bytes, topic: str = "fulfillments/create") -> dict[str, str]:
        return {
            "X-Shopify-Hmac-Sha256": sign(body),
            "X-Shopify-Topic": topic,
            "X-Shopify-Shop-Domain": SHOP_DOMAIN,
            "Content-Type": "application/json",
        }

    return _headers


@pytest.fixture
def fulfillment_body() -> Callable[..., bytes]:
    """Encode a fulfillment payload the way Shopify sends it."""

    def _body(**fields) -> bytes:
        return json.dumps(fields).encode("utf-8")

    return _body
