"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    debug: bool = True
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./event_booking.db"
    db_create_all: bool = True

    # Admin access
    admin_api_key: str = "dev-admin-key"

    # Email
    email_provider: Literal["console", "sendgrid"] = "console"
    sendgrid_api_key: str = ""
    sendgrid_base_url: str = "https://api.sendgrid.com/v3"
    email_from_address: str = "noreply@event-booking.local"
    email_from_name: str = "Event Booking Platform"
    email_timeout: float = 10.0

    # QR codes
    qr_code_dir: str = "uploads/qrcodes"
    qr_code_url_prefix: str = "/uploads/qrcodes"

    # Payment webhooks
    webhook_providers: list[str] = ["telebirr"]

    # Booking status administration
    enforce_payment_on_confirm: bool = False

    # URLs
    frontend_url: str = "http://localhost:3000"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
