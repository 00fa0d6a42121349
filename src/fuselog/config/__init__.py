"""
fuselog Configuration Module.

Usage:
    from fuselog.config import settings

    settings.logging.syslog
    settings.logging.cloudwatch_enabled
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import LoggingSettings


class Settings(BaseSettings):
    """Composite settings; each sub-settings class loads its own env prefix."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


settings = Settings()

__all__ = ["LoggingSettings", "Settings", "settings"]
