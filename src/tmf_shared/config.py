"""Environment-driven settings.

All configuration comes from environment variables so the same build runs
locally (uvicorn), in tests (moto) and on Lambda (Mangum).
"""

import os
from functools import lru_cache

from pydantic import BaseModel, Field

from .models.enums import NotificationDelivery

DEFAULT_BASE_PATH = "/tmf-api/paymentMethod/v4"


class Settings(BaseModel):
    """Runtime settings for the API and its services."""

    environment: str = Field(default="dev", description="Deployment environment")
    table_prefix: str = Field(
        default="tmf670-dev", description="Prefix prepended to every table name"
    )
    base_path: str = Field(
        default=DEFAULT_BASE_PATH, description="API base path, also used for href"
    )
    notification_delivery: NotificationDelivery = NotificationDelivery.LOG
    notification_timeout_seconds: float = Field(default=5.0, gt=0)
    log_level: str = "INFO"
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"]
    )

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from environment variables."""
        environment = os.getenv("ENVIRONMENT", "dev")
        origins = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000")
        return cls(
            environment=environment,
            # Allow override via DYNAMODB_TABLE_PREFIX for testing
            table_prefix=os.getenv("DYNAMODB_TABLE_PREFIX", f"tmf670-{environment}"),
            base_path=os.getenv("BASE_PATH", DEFAULT_BASE_PATH).rstrip("/"),
            notification_delivery=NotificationDelivery(
                os.getenv("NOTIFICATION_DELIVERY", NotificationDelivery.LOG.value)
            ),
            notification_timeout_seconds=float(
                os.getenv("NOTIFICATION_TIMEOUT_SECONDS", "5")
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings, read from the environment on first call."""
    return Settings.from_env()


def reset_settings() -> None:
    """Drop cached settings (for testing only)."""
    get_settings.cache_clear()
