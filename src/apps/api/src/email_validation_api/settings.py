"""API settings."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    upload_dir: str = "/tmp/uploads"
    max_upload_mb: int = Field(default=10, ge=1)

    validation_concurrency: int = Field(default=5, ge=1)
    validator_min_latency_ms: int = Field(default=100, ge=0)
    validator_max_latency_ms: int = Field(default=300, ge=0)
    validator_failure_rate: float = Field(default=0.1, ge=0.0, le=1.0)

    retention_enabled: bool = True
    retention_max_age_seconds: int = Field(default=3600, ge=0)
    retention_interval_seconds: int = Field(default=3600, ge=1)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
