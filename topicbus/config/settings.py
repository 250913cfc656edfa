"""Library Settings using Pydantic.

Environment-based configuration with validation.

Environment Variables:
    TOPICBUS_ENVIRONMENT: development | staging | production
    TOPICBUS_DEBUG: Force DEBUG log level (default: False)
    TOPICBUS_EVENT_BUS_ERROR_POLICY: propagate | isolate
    TOPICBUS_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR | CRITICAL
    TOPICBUS_LOG_FORMAT: json | console

Example .env file:
    TOPICBUS_ENVIRONMENT=production
    TOPICBUS_EVENT_BUS_ERROR_POLICY=isolate
    TOPICBUS_LOG_FORMAT=json
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from topicbus.domain.subscriptions.error_policy import ErrorPolicy


class Settings(BaseSettings):
    """Library settings.

    All settings can be overridden via TOPICBUS_-prefixed environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOPICBUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Core ====================
    app_name: str = "topicbus"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # ==================== Event Bus ====================
    event_bus_error_policy: ErrorPolicy = Field(
        default=ErrorPolicy.PROPAGATE,
        description="What publish does when a subscriber raises",
    )

    # ==================== Logging ====================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings instance.
    """
    return Settings()
