"""
Runtime configuration for Tracklink.

Settings are read from the environment once at process start (after
``load_dotenv()``) and handed to the components that need them.
"""

import os

from pydantic import BaseModel, Field

SERVICE_NAME = "tracklink"
DEFAULT_PORT = 10000
DEFAULT_DB_NAME = "tracklink"


class Settings(BaseModel):
    """Process-wide settings loaded from environment variables."""

    shopify_webhook_secret: str = Field(
        default="", description="Shared secret used to sign Shopify webhooks"
    )
    database_url: str | None = Field(
        default=None, description="SQLAlchemy URL (local development)"
    )
    instance_connection_name: str | None = Field(
        default=None, description="Cloud SQL instance (project:region:instance)"
    )
    db_name: str = Field(default=DEFAULT_DB_NAME, description="Database name")
    db_user: str | None = Field(
        default=None, description="Database user (service account for IAM auth)"
    )
    host: str = Field(default="0.0.0.0", description="Listening interface")
    port: int = Field(default=DEFAULT_PORT, description="Listening port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Allowed CORS origins"
    )
    environment: str = Field(default="local", description="Deployment environment")
    log_level: str = Field(default="INFO", description="Root log level name")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current process environment."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            shopify_webhook_secret=os.getenv("SHOPIFY_WEBHOOK_SECRET", ""),
            database_url=os.getenv("DATABASE_URL") or None,
            instance_connection_name=os.getenv("INSTANCE_CONNECTION_NAME") or None,
            db_name=os.getenv("DB_NAME", DEFAULT_DB_NAME),
            db_user=os.getenv("DB_USER") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", DEFAULT_PORT)),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            environment=os.getenv("GOOGLE_CLOUD_PROJECT", "local"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def webhook_secret_bytes(self) -> bytes:
        return self.shopify_webhook_secret.encode("utf-8")

    @property
    def is_database_configured(self) -> bool:
        """True when either a direct URL or Cloud SQL credentials are present."""
        if self.database_url:
            return True
        return bool(self.instance_connection_name and self.db_user)

    def missing_required(self) -> list[str]:
        """
        List required settings that are absent.

        Returns:
            Environment variable names that must be set for correct operation
        """
        missing = []
        if not self.shopify_webhook_secret:
            missing.append("SHOPIFY_WEBHOOK_SECRET")
        if not self.is_database_configured:
            if not self.instance_connection_name:
                missing.append("DATABASE_URL or INSTANCE_CONNECTION_NAME")
            if self.instance_connection_name and not self.db_user:
                missing.append("DB_USER")
        return missing
