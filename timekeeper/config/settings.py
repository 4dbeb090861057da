"""
Configuration management for the time-accounting engine.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TimekeeperConfig(BaseSettings):
    """Configuration settings for time-entry reporting."""

    # Time-entry store
    api_url: Optional[str] = Field(default=None, alias="TIMEKEEPER_API_URL")
    api_token: Optional[str] = Field(default=None, alias="TIMEKEEPER_API_TOKEN")
    api_timeout: float = Field(default=30.0, alias="TIMEKEEPER_API_TIMEOUT")
    data_file: Optional[str] = Field(default=None, alias="TIMEKEEPER_DATA_FILE")

    # Report output
    report_output_dir: str = Field(default="reports", alias="REPORT_OUTPUT_DIR")
    report_title: str = Field(default="Time Entries Report", alias="REPORT_TITLE")
    currency_symbol: str = Field(default="R$", alias="REPORT_CURRENCY_SYMBOL")
    date_format: str = Field(default="%d/%m/%Y", alias="REPORT_DATE_FORMAT")
    decimal_separator: str = Field(default=",", alias="REPORT_DECIMAL_SEPARATOR")
    thousands_separator: str = Field(default=".", alias="REPORT_THOUSANDS_SEPARATOR")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v):
        """Ensure the API URL is absolute and has no trailing slash."""
        if v is None or not v.strip():
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("API URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("api_timeout")
    @classmethod
    def validate_api_timeout(cls, v):
        if v <= 0:
            raise ValueError("API timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @property
    def output_dir(self) -> Path:
        return Path(self.report_output_dir)

    def has_api(self) -> bool:
        """Whether an HTTP time-entry store is configured."""
        return self.api_url is not None


def load_config(env_file: Optional[str] = None) -> TimekeeperConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return TimekeeperConfig()


# Global configuration instance
_config: Optional[TimekeeperConfig] = None


def get_config() -> TimekeeperConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> TimekeeperConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
