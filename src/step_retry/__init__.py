"""step-retry: run fallible steps in order, retrying each until it succeeds."""

from .config import Settings, get_settings
from .domain import (
    DeadlineExceededError,
    ErrorCode,
    InvalidDelayError,
    InvalidStepError,
    RunCancelledError,
    StepRetryException,
)
from .retry import (
    CANCEL,
    SKIP,
    STOP,
    SUCCESS,
    Cancel,
    CancellationSignal,
    DelayStrategy,
    ExecutionContext,
    ExponentialBackoffStrategy,
    Failure,
    FixedDelayStrategy,
    RetryConfig,
    RetryExecutor,
    RetrySettings,
    RunReport,
    Skip,
    Stop,
    Success,
    TenacityDelayStrategy,
    Wait,
    do,
    exponential_backoff,
    fixed,
    run,
    strategy_from_config,
)

__version__ = "0.1.0"

__all__ = [
    "run",
    "do",
    "RetryExecutor",
    "RunReport",
    "ExecutionContext",
    "CancellationSignal",
    "Success",
    "Failure",
    "Skip",
    "Cancel",
    "SUCCESS",
    "SKIP",
    "CANCEL",
    "Wait",
    "Stop",
    "STOP",
    "DelayStrategy",
    "FixedDelayStrategy",
    "ExponentialBackoffStrategy",
    "TenacityDelayStrategy",
    "fixed",
    "exponential_backoff",
    "RetryConfig",
    "RetrySettings",
    "strategy_from_config",
    "Settings",
    "get_settings",
    "ErrorCode",
    "StepRetryException",
    "RunCancelledError",
    "DeadlineExceededError",
    "InvalidDelayError",
    "InvalidStepError",
]
