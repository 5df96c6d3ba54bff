from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    app_name: str = Field(default="newsletter", alias="APP_NAME")
    environment: str = Field(default="production", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    sendgrid_api_key: str | None = Field(default=None, alias="SENDGRID_API_KEY")
    from_email: str | None = Field(default=None, alias="FROM_EMAIL")
    base_url: str | None = Field(default=None, alias="BASE_URL")
    sendgrid_timeout_seconds: float = Field(default=10, alias="SENDGRID_TIMEOUT_SECONDS")

    rate_limit_window_seconds: float = Field(default=3600, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_ip_per_window: int = Field(default=5, alias="RATE_LIMIT_IP_PER_WINDOW")
    rate_limit_email_per_window: int = Field(default=3, alias="RATE_LIMIT_EMAIL_PER_WINDOW")
    rate_limit_max_keys: int | None = Field(default=100_000, alias="RATE_LIMIT_MAX_KEYS")

    log_hash_pepper: str = Field(default="", alias="LOG_HASH_PEPPER")

    @field_validator("sendgrid_api_key", "from_email", "base_url", mode="before")
    @classmethod
    def blank_as_missing(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return level


settings = Settings()
