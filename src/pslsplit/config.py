"""Configuration management using pydantic-settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Ruleset sources: "snapshot", "remote", an http(s) URL or a file path
    source_uri: str = "snapshot"
    extra_source_uri: Optional[str] = None

    # Compilation
    disable_private_domains: bool = False

    # Staleness (seconds), unset means never refresh
    expire_seconds: Optional[int] = None

    # Output
    unicode_output: bool = True

    # Remote fetch timeout (seconds)
    fetch_timeout_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"


settings = Settings()
