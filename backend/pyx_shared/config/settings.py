"""
Centralized process settings for the card importer

Pydantic Settings bound to environment variables (prefix ``PYX_IMPORTER_``) and an
optional ``.env`` file. Command-line flags override these per run.
"""

import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImporterSettings(BaseSettings):
    """Importer process settings"""

    model_config = SettingsConfigDict(
        env_prefix="PYX_IMPORTER_",
        env_file=".env" if not os.getenv("DOCKER_CONTAINER") else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    config_path: str = Field(
        default="importer.json",
        description="Import configuration file"
    )
    format_text: bool = Field(
        default=True,
        description="Convert rich-text formatting into markup"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )
    output_path: Optional[str] = Field(
        default=None,
        description="Write the JSON import report here instead of logging it"
    )
    fail_on_anomalies: bool = Field(
        default=False,
        description="Exit non-zero when any anomaly was reported"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return str(v or "INFO").strip().upper()


settings = ImporterSettings()


def get_settings() -> ImporterSettings:
    """
    Get the global settings instance

    Returns:
        ImporterSettings: The global settings instance
    """
    return settings


def reload_settings() -> ImporterSettings:
    """
    Reload settings from environment (useful for testing)

    Returns:
        ImporterSettings: New settings instance with reloaded values
    """
    global settings
    settings = ImporterSettings()
    return settings
