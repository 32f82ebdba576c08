"""Configuration management for Manuscript Graph."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MSG_",
    )

    # Input guard
    max_text_length: int = Field(
        default=2_000_000, description="Reject chapter text longer than this"
    )

    # Graph settings
    evidence_limit: int = Field(default=10, description="Evidence snippets kept per edge after a merge")
    snippet_length: int = Field(default=100, description="Characters of paragraph kept as evidence")

    # Logging
    log_level: str = Field(default="WARNING", description="CLI log level when not verbose")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
