"""Configuration settings using Pydantic Settings."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: Literal["development", "production"] = "development"
    api_docs_enabled: bool | None = None
    log_level: str = "INFO"

    # CORS
    cors_allow_origins: list[str] = ["http://localhost:5173"]
    cors_allow_methods: list[str] = ["GET", "POST", "OPTIONS"]
    cors_allow_headers: list[str] = [
        "Accept",
        "Authorization",
        "Content-Type",
        "X-Request-ID",
        "X-Metrics-Token",
    ]
    cors_allow_credentials: bool = False

    # Prometheus scrape token (required in production)
    metrics_token: str | None = None

    # Business rules
    money_tolerance: Decimal = Decimal("0.01")
    rejection_reason_min_length: int = 10
    delivery_window_min_days: int = 1
    delivery_window_max_days: int = 365
    short_lead_time_days: int = 7
    min_manufacturing_days: int = 1
    approval_threshold_default: Decimal = Decimal("1000")

    @field_validator(
        "cors_allow_origins",
        "cors_allow_methods",
        "cors_allow_headers",
        mode="before",
    )
    @classmethod
    def _parse_csv_lists(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @model_validator(mode="after")
    def _validate_settings(self) -> Settings:
        if self.delivery_window_min_days > self.delivery_window_max_days:
            raise ValueError("DELIVERY_WINDOW_MIN_DAYS cannot exceed DELIVERY_WINDOW_MAX_DAYS")

        if self.environment != "production":
            return self

        if any(x == "*" for x in self.cors_allow_origins):
            raise ValueError("CORS_ALLOW_ORIGINS cannot contain '*' in production")
        if any(x == "*" for x in self.cors_allow_methods):
            raise ValueError("CORS_ALLOW_METHODS cannot contain '*' in production")
        if any(x == "*" for x in self.cors_allow_headers):
            raise ValueError("CORS_ALLOW_HEADERS cannot contain '*' in production")

        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
