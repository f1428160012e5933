"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "ERDDAP Feeder"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Feeder configuration file (acceptance rules, publishing, MMSI lookup)
    config_file: str = "config/erddap_feeder.yaml"

    # Listener
    bind_host: str = "0.0.0.0"
    bind_port: int = 22022
    dump_all_packets: bool = False

    # ERDDAP
    erddap_timeout_s: Optional[float] = 30.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
