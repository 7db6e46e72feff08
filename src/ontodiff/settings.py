"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the ontodiff verification service.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Formatter
    format_namespaces_on_new_line: bool = False
    format_indent: int = 2


def configure_logging(settings: Settings | None = None) -> None:
    """Install a root handler at the configured level."""
    if settings is None:
        settings = Settings()
    logging.basicConfig(level=settings.log_level.upper())
