"""
Configuration management for RentLedger.
Loads settings from YAML configuration files.
"""

import os

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from YAML config files."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="allow",
        populate_by_name=True,
    )

    # Application
    app_env: str = Field(default="development", alias="APP_ENV")
    app_debug: bool = Field(default=True, alias="APP_DEBUG")

    # Logging
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file_path: str = Field(default="logs/rentledger.log", alias="LOG_FILE_PATH")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
    log_max_bytes: int = Field(default=20 * 1024 * 1024, alias="LOG_MAX_BYTES")
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./rentledger.db", alias="DATABASE_URL"
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # API
    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    api_title: str = Field(default="RentLedger API", alias="API_TITLE")
    api_version: str = Field(default="0.1.0", alias="API_VERSION")

    # CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"], alias="CORS_ORIGINS"
    )

    # JWT
    jwt_secret_key: str = Field(
        default="your-secret-key-change-this-in-production", alias="JWT_SECRET_KEY"
    )
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_issuer: str | None = Field(default=None, alias="JWT_ISSUER")
    access_token_expire_minutes: int = Field(
        default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES"
    )

    # Portfolio
    report_access_key: str = Field(default="change-me", alias="REPORT_ACCESS_KEY")
    upcoming_window_days: int = Field(default=90, alias="UPCOMING_WINDOW_DAYS")
    currency_code: str = Field(default="NGN", alias="CURRENCY_CODE")
    company_name: str = Field(default="Gabinas Properties Limited", alias="COMPANY_NAME")
    report_sender: str = Field(default="no-reply@rentledger.local", alias="REPORT_SENDER")

    @classmethod
    def from_yaml(cls, config_path: str) -> "Settings":
        """Load settings from YAML file."""
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}
        return cls(**config_data)


def get_settings() -> Settings:
    """Get settings instance - requires CONFIG environment variable.

    Raises:
        ValueError: If CONFIG environment variable is not set
        FileNotFoundError: If config file doesn't exist
    """
    config_path = os.getenv("CONFIG")

    if not config_path:
        raise ValueError(
            "CONFIG environment variable is not set!\n"
            "\n"
            "Please set it to your configuration file path:\n"
            "  export CONFIG=resources/config/local.yaml"
        )

    if not os.path.exists(config_path):
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please check the CONFIG environment variable points to a valid file."
        )

    return Settings.from_yaml(config_path)


# Load settings at import time
settings = get_settings()
