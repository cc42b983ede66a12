"""
Application settings

Loaded from environment variables (prefix DOTS_) or a local .env file, using Pydantic Settings.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./dots.db"
    echo_sql: bool = False

    # Logging
    log_level: str = "INFO"

    # Game rules
    move_history_limit: int = 50
    max_explosion_waves: int = 1000
    default_level_set: str = "default"

    model_config = SettingsConfigDict(
        env_prefix="DOTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("move_history_limit", "max_explosion_waves")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"Must be at least 1, got {value}")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()
