# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the source URL, database, scraping and logging settings

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="WEBDEV_SCRAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Source Configuration
    source_url: str = Field(
        default="https://www.reddit.com/r/webdev", description="Listing page scraped on every ingestion trigger"
    )
    fetch_timeout: float = Field(default=10.0, description="Timeout in seconds for fetching the listing page")
    user_agent: str = Field(
        default="webdev-scraper/0.1 (+https://github.com/webdev-scraper)",
        description="User-Agent header sent with source requests",
    )

    # Extraction Configuration
    title_selector: str = Field(default="p.title", description="CSS selector for title-bearing elements")
    html_parser: str = Field(default="html.parser", description="BeautifulSoup parser backend")

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./webdev_scraper.db", description="Database URL for async SQLite operations"
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] | None = Field(
        default=None, description="Logging output mode, detected from the terminal when unset"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    @field_validator("log_mode", mode="before")
    @classmethod
    def _normalize_log_mode(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
