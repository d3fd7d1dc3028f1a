"""Configuration management for the push relay."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # VAPID keypair (required at startup, checked by VapidKeys.from_settings)
    vapid_public_key: str | None = Field(default=None)
    vapid_private_key: str | None = Field(default=None)
    vapid_subject: str = Field(default="mailto:test@example.com")

    # Server
    host: str = Field(default="0.0.0.0")  # noqa: S104
    port: int = Field(default=5000)
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default=["*"])

    # Push transport
    push_timeout_seconds: float = Field(default=5.0)
    push_ttl_seconds: int = Field(default=2419200)  # 4 weeks
    welcome_notification_enabled: bool = Field(default=True)

    @model_validator(mode="after")
    def validate_push_settings(self) -> "Settings":
        """Validate transport bounds and production-only requirements."""
        if self.push_timeout_seconds <= 0:
            raise ValueError("PUSH_TIMEOUT_SECONDS must be positive")
        if self.environment == "production" and "example.com" in self.vapid_subject:
            raise ValueError("VAPID_SUBJECT must be changed in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
