"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_config(prefix: str = "") -> SettingsConfigDict:
    """Settings config reading the process environment and .env."""
    return SettingsConfigDict(
        env_prefix=prefix,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class DatabaseSettings(BaseSettings):
    """Entity store location."""

    model_config = _env_config("KINSHIP_DB_")

    path: str = "data/kinship.db"


class RegistrySettings(BaseSettings):
    """Person registration behaviour."""

    model_config = _env_config("REGISTRY_")

    # create_new: every submission without a family id gets a fresh family
    on_missing_family: Literal["create_new", "find_or_create_by_name"] = "create_new"
    require_last_name: bool = False


class LoggingSettings(BaseSettings):
    """Structured logging settings."""

    model_config = _env_config("LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = True


class Settings(BaseSettings):
    """Main application settings."""

    model_config = _env_config()

    database: DatabaseSettings = DatabaseSettings()
    registry: RegistrySettings = RegistrySettings()
    logging: LoggingSettings = LoggingSettings()


settings = Settings()
