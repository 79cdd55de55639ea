"""Configuration for step-retry."""

from .settings import LoggingSettings, Settings, get_settings

__all__ = ["LoggingSettings", "Settings", "get_settings"]
