"""Structured logging configuration and utilities."""

from .config import (
    LogFormat,
    LogLevel,
    get_logger,
    setup_development_logging,
    setup_logging,
    setup_testing_logging,
)
from .correlation import RunIDProcessor, bind_run_id, generate_run_id, get_run_id

__all__ = [
    "setup_logging",
    "setup_development_logging",
    "setup_testing_logging",
    "LogLevel",
    "LogFormat",
    "get_logger",
    "RunIDProcessor",
    "bind_run_id",
    "generate_run_id",
    "get_run_id",
]
