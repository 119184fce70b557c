"""
Tracklink API - Main FastAPI Application.

Receives Shopify fulfillment webhooks and serves tracking lookups to the storefront.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from tracklink import __version__
from tracklink.config import SERVICE_NAME, Settings
from tracklink.db import DatabaseConnection
from tracklink.utils.logging import setup_logging

# Load environment variables
load_dotenv()

settings = Settings.from_env()

# Configure logging early
setup_logging(SERVICE_NAME, settings.log_level)

logger = logging.getLogger(__name__)

ROOT_MESSAGE = "Shopify Tracking App Backend is running!"


def _init_database(settings: Settings) -> bool:
    """Initialize database connection if configured."""
    if not settings.is_database_configured:
        logger.error(
            "Database not configured: set DATABASE_URL or "
            "INSTANCE_CONNECTION_NAME and DB_USER. Webhooks will be acknowledged "
            "but not stored, and lookups will fail."
        )
        return False

    try:
        DatabaseConnection.initialize(
            database_url=settings.database_url,
            instance_connection_name=settings.instance_connection_name,
            db_name=settings.db_name,
            db_user=settings.db_user,
        )
        logger.info("Database connection initialized")
        return True
    except Exception:
        logger.exception("Database: Failed to connect")
        return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    settings: Settings = app.state.settings

    logger.info("Starting Tracklink API (environment: %s)", settings.environment)

    for name in settings.missing_required():
        logger.error("Required setting missing: %s", name)

    db_initialized = _init_database(settings)

    yield

    if db_initialized:
        DatabaseConnection.close()
        logger.info("Database connection closed")

    logger.info("Shutting down Tracklink API")


OPENAPI_TAGS = [
    {
        "name": "webhooks",
        "description": "Shopify fulfillment webhooks (HMAC verified)",
    },
    {
        "name": "tracking",
        "description": "Tracking URL lookup by order number",
    },
    {
        "name": "system",
        "description": "System health and information endpoints",
    },
]

app = FastAPI(
    title="Tracklink API",
    description=(
        "Stores Shopify fulfillment tracking URLs keyed by order number and "
        "serves them to the storefront.\n\n"
        "**Webhooks:** signed with `X-Shopify-Hmac-Sha256` over the raw body.\n\n"
        "**Lookup:** `#1001`, `1001` and `1001.1` resolve to the same order."
    ),
    version=__version__,
    lifespan=lifespan,
    openapi_tags=OPENAPI_TAGS,
)
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get(
    "/",
    tags=["system"],
    operation_id="getServiceInfo",
    response_class=PlainTextResponse,
)
async def root():
    """Liveness check for the storefront and uptime monitors."""
    return ROOT_MESSAGE


@app.get("/health", tags=["system"], operation_id="healthCheck")
async def health_check():
    """Check service health status (used by Cloud Run monitoring)."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "environment": app.state.settings.environment,
        "database": DatabaseConnection.is_initialized(),
    }


# Import and include routers
from tracklink.api.routes import tracking, webhooks

app.include_router(webhooks.router, tags=["webhooks"])
app.include_router(tracking.router, tags=["tracking"])
