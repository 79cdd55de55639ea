"""
Configuration management for step-retry.

Settings are read from the environment (and an optional ``.env`` file) with
pydantic-settings. Retry behaviour uses the ``STEP_RETRY_`` prefix, logging
the ``STEP_RETRY_LOG_`` prefix.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..observability.logging import LogFormat, LogLevel, setup_logging
from ..retry.config import RetrySettings


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STEP_RETRY_LOG_", env_file=".env", extra="ignore"
    )

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str | None = None
    colors: bool = True

    def apply(self) -> None:
        """Configure structlog from these settings."""
        setup_logging(
            level=self.level,
            format_type=self.format,
            log_file=self.file,
            enable_colors=self.colors,
        )


class Settings(BaseSettings):
    """Library settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def get_settings() -> Settings:
    """Get settings from the current environment."""
    return Settings()
