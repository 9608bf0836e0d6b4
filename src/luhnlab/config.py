"""
Luhnlab configuration management using pydantic-settings.
"""

import logging
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from luhnlab.security.plans import PLAN_LIMITS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )

    # Application Settings
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Security - CORS
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # API keys -> plan type (hobby, pro, team)
    api_keys: dict[str, str] = Field(
        default_factory=dict,
        description="API key to plan mapping, JSON encoded in the environment",
    )

    # Quota windows
    quota_backend: str = Field(
        default="memory",
        description="Quota counter store: 'memory' or 'redis'",
    )
    redis_url: str = Field(
        default="redis://localhost:6379",
        description="Redis connection URL (quota_backend=redis)",
    )
    standard_window_seconds: int = Field(
        default=15 * 60, gt=0, description="Standard quota window length"
    )
    bulk_window_seconds: int = Field(
        default=60 * 60, gt=0, description="Bulk export quota window length"
    )
    bulk_window_limit: int = Field(
        default=10, gt=0, description="Bulk exports allowed per bulk window"
    )
    bulk_threshold: int = Field(
        default=100,
        ge=1,
        description="Requests asking for more records than this count as bulk",
    )

    # Generation
    postal_data_path: Path = Field(
        default=Path("data/postnummer.csv"),
        description="Postal code dataset (postnummer, ort, kommun, kommunkod, län)",
    )
    mask_default_salt: str = Field(
        default="luhn.se-mask-salt",
        description="Salt used by masking when the caller supplies none",
    )
    email_domain: str = Field(
        default="luhn.se", description="Domain for generated email addresses"
    )
    max_delay_ms: int = Field(
        default=10_000, ge=0, description="Upper bound for the ?delay parameter"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("quota_backend")
    @classmethod
    def validate_quota_backend(cls, v: str) -> str:
        backend = v.lower()
        if backend not in ("memory", "redis"):
            raise ValueError("QUOTA_BACKEND must be 'memory' or 'redis'")
        return backend

    @field_validator("api_keys")
    @classmethod
    def validate_api_keys(cls, v: dict[str, str]) -> dict[str, str]:
        """Every configured key must map to a known plan."""
        unknown = {plan for plan in v.values() if plan not in PLAN_LIMITS}
        if unknown:
            raise ValueError(f"Unknown plan(s) in API_KEYS: {', '.join(sorted(unknown))}")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Ensure critical settings are configured in production."""
        if self.environment == "production" and self.debug:
            raise ValueError("DEBUG must be False in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Global settings instance
settings = Settings()
