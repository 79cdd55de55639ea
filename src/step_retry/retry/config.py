"""Retry configuration models and settings."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .strategies import (
    DEFAULT_BASE_DELAY,
    ExponentialBackoffStrategy,
    FixedDelayStrategy,
    RetryStrategy,
)


class StrategyKind(str, Enum):
    """Built-in delay strategies."""

    FIXED = "fixed"
    EXPONENTIAL = "exponential"


class RetryConfig(BaseModel):
    """Retry configuration for a sequence of steps."""

    strategy: StrategyKind = Field(
        default=StrategyKind.EXPONENTIAL, description="Delay strategy to use"
    )
    delay: float = Field(
        default=0.5, ge=0.0, description="Fixed delay in seconds between retries"
    )
    max_retries: int = Field(
        default=-1,
        description="Retries per step for exponential backoff, negative for unlimited",
    )
    base_delay: float = Field(
        default=DEFAULT_BASE_DELAY,
        ge=0.0,
        description="First exponential backoff delay in seconds",
    )
    interrupt_steps: bool = Field(
        default=False, description="Cancel a running step when the run is cancelled"
    )

    @field_validator("strategy", mode="before")
    @classmethod
    def normalize_strategy(cls, v: Any) -> Any:
        """Accept strategy names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def build_strategy(self) -> RetryStrategy:
        """Create the delay strategy described by this configuration."""
        if self.strategy == StrategyKind.FIXED:
            return FixedDelayStrategy(self.delay)
        return ExponentialBackoffStrategy(self.max_retries, self.base_delay)


class RetrySettings(BaseSettings):
    """Retry configuration read from ``STEP_RETRY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STEP_RETRY_", env_file=".env", extra="ignore"
    )

    strategy: str = StrategyKind.EXPONENTIAL.value
    delay: float = 0.5
    max_retries: int = -1
    base_delay: float = DEFAULT_BASE_DELAY
    interrupt_steps: bool = False

    def get_retry_config(self) -> RetryConfig:
        """Get the validated retry configuration."""
        return RetryConfig(
            strategy=self.strategy,
            delay=self.delay,
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            interrupt_steps=self.interrupt_steps,
        )


def strategy_from_config(config: RetryConfig) -> RetryStrategy:
    """Create a delay strategy from a retry configuration."""
    return config.build_strategy()
