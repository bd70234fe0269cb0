"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    face_api_url: str = "http://localhost:5000"
    face_api_timeout_seconds: float = 30.0
    upload_timeout_seconds: int = 20
    photo_bucket: str = "event-photos"
    max_upload_bytes: int = 10 * 1024 * 1024
    max_files_per_batch: int = 10
    processing_delay_seconds: float = 2.0
    retention_days: int = 7
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def normalize_base_url(raw: str) -> str:
    """Strip quotes and trailing slashes from a configured service URL."""
    return raw.strip().strip("\"'").rstrip("/")
