# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to endpoints, cache directories, rate limits and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="COUNTRY_CARDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Remote endpoints
    export_url: str = Field(
        default="https://en.wikipedia.org/wiki/Special:Export",
        description="Wiki export endpoint, the article title is appended as a path segment",
    )
    media_base_url: str = Field(
        default="https://upload.wikimedia.org/wikipedia/commons",
        description="Root of the sharded media storage",
    )
    user_agent: str = Field(
        default="country-cards/0.1 (https://github.com/country-cards/country-cards)",
        description="User-Agent header sent with every request",
    )
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    # Rate limiting (token bucket shared by every fetch path)
    rate_limit_capacity: int = Field(default=2, ge=1, description="Token bucket capacity")
    rate_limit_interval: float = Field(default=1.0, gt=0, description="Seconds to refill one token")

    # Redirects
    max_redirects: int = Field(default=10, ge=0, description="Longest redirect chain followed before giving up")

    # Layout
    seed_article: str = Field(
        default="Member_states_of_the_United_Nations", description="Article listing every country"
    )
    pages_dir: Path = Field(default=Path("pages"), description="Article cache directory")
    files_dir: Path = Field(default=Path("files"), description="Media cache directory")
    output_dir: Path = Field(default=Path("countries"), description="Flashcard output directory")
    country_list_file: Path = Field(default=Path("countries.txt"), description="Sorted country list artifact")
    overrides_file: Path | None = Field(
        default=None, description="JSON file of extra field overrides merged over the built-in table"
    )

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


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
