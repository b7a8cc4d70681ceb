import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Fantrax Configuration
    fantrax_league_id: Optional[str] = Field(
        None, description="League identifier used in the setup page URLs."
    )
    fantrax_cookies: Optional[str] = Field(
        None, description="Cookie header for an authenticated Fantrax session."
    )
    fantrax_base_url: str = Field(
        "https://www.fantrax.com", description="Base URL of the Fantrax site."
    )
    user_agent: str = Field(
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko)",
        description="User-Agent header sent with every request.",
    )

    # Network Settings
    request_timeout: float = Field(
        30.0, gt=0, description="Timeout in seconds for a single HTTP call."
    )
    fetch_retry_attempts: int = Field(
        3,
        ge=1,
        description="Attempts the CLI makes to fetch the setup page (never used for POSTs).",
    )
    upload_delay_seconds: float = Field(
        1.0, ge=0, description="Pause between period submissions during an upload."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
