from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


#  Working modes
class AppEnvironment(str, Enum):
    """Working modes"""
    DEV = "development"
    LOCAL = "local"
    PROD = "production"
    TEST = "testing"


class Settings(BaseSettings):
    """
    Process settings.
    Reads from .env file or UDP_INGEST_* environment variables.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UDP_INGEST_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    env: AppEnvironment = Field(default=AppEnvironment.DEV, alias="APP_ENV")
    config_path: Path = Field(default=Path("udp.toml"), description="TOML file holding [[udp]] sections")
    log_level: str = Field(default="INFO", description="Root log level")


@lru_cache
def get_settings() -> Settings:
    """
    Creates and returns a (cached) instance of settings.
    """
    return Settings()
