# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single, immutable Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   app = create_app(settings)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, so a missing recipient
# address stops the process before it starts listening.
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = (
    "https://sandipnanavati.com,"
    "https://www.sandipnanavati.com,"
    "http://127.0.0.1:5500,"
    "http://localhost:5500"
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Instances are frozen: the relay credentials and recipient address are
    read once at startup and handed to `create_app`, never mutated after.
    """

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the HTTP server"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the HTTP server to"
    )

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug logging"
    )

    # -------------------------------------------------------------------------
    # Mail Relay (SMTP over implicit TLS)
    # -------------------------------------------------------------------------

    SMTP_HOST: str = Field(
        default="localhost",
        description="Relay host name"
    )

    SMTP_PORT: int = Field(
        default=465,
        ge=1,
        le=65535,
        description="Relay port (implicit TLS)"
    )

    SMTP_USER: str | None = Field(
        default=None,
        description="Relay username, also the sender address"
    )

    SMTP_PASS: str | None = Field(
        default=None,
        description="Relay password"
    )

    SMTP_TIMEOUT: float = Field(
        default=60.0,
        gt=0,
        description="Socket timeout for the relay connection, in seconds"
    )

    # Off by default. Some shared hosts present a certificate that does not
    # match their relay hostname; only enable this for those.
    SMTP_TLS_INSECURE: bool = Field(
        default=False,
        description="Skip certificate and hostname verification on the relay"
    )

    RECEIVER_EMAIL: str | None = Field(
        default=None,
        description="Where submissions are delivered (falls back to SMTP_USER)"
    )

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------

    # Comma-separated, matched exactly against the Origin header
    CORS_ORIGINS: str = Field(
        default=DEFAULT_CORS_ORIGINS,
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Attachment Staging
    # -------------------------------------------------------------------------

    UPLOAD_DIR: str = Field(
        default="uploads",
        description="Scratch directory for staged attachments"
    )

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum attachment size in MB"
    )

    DISCARD_ON_RELAY_FAILURE: bool = Field(
        default=False,
        description="Also delete the staged attachment when the relay send fails"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Empty values count as unset, so RECEIVER_EMAIL="" falls back to SMTP_USER
        env_ignore_empty=True,
        case_sensitive=True,
        frozen=True,
    )

    @model_validator(mode="after")
    def _require_receiver(self) -> "Settings":
        if not (self.RECEIVER_EMAIL or self.SMTP_USER):
            raise ValueError(
                "RECEIVER_EMAIL is not defined and SMTP_USER is not set to fall back on"
            )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def receiver_email(self) -> str:
        """Destination address for every relayed submission."""
        return self.RECEIVER_EMAIL or self.SMTP_USER

    @property
    def sender_address(self) -> str:
        """
        Envelope sender. The relay account itself when configured, otherwise
        the receiver (unauthenticated relays).
        """
        return self.SMTP_USER or self.receiver_email

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "https://a.com, http://localhost:5500" -> ["https://a.com", "http://localhost:5500"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def upload_path(self) -> Path:
        return Path(self.UPLOAD_DIR)

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.

    Raises:
        pydantic.ValidationError: If no recipient address can be determined
    """
    return Settings()
