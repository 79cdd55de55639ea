"""Sequential retry execution.

Steps run strictly in order; a failing step is retried after the delay its
strategy chooses, and the whole run can be cut short by a cancellation signal.
"""

from .cancellation import CancellationSignal
from .config import RetryConfig, RetrySettings, StrategyKind, strategy_from_config
from .context import ExecutionContext
from .executor import RetryExecutor, RunReport, Step, StepState, do, run
from .outcomes import CANCEL, SKIP, SUCCESS, Cancel, Failure, Outcome, Skip, Success
from .strategies import (
    STOP,
    Delay,
    DelayStrategy,
    ExponentialBackoffStrategy,
    FixedDelayStrategy,
    RetryStrategy,
    Stop,
    TenacityDelayStrategy,
    Wait,
    exponential_backoff,
    fixed,
    normalize_delay,
)

__all__ = [
    "run",
    "do",
    "RetryExecutor",
    "RunReport",
    "Step",
    "StepState",
    "ExecutionContext",
    "CancellationSignal",
    "Outcome",
    "Success",
    "Failure",
    "Skip",
    "Cancel",
    "SUCCESS",
    "SKIP",
    "CANCEL",
    "Delay",
    "DelayStrategy",
    "Wait",
    "Stop",
    "STOP",
    "normalize_delay",
    "RetryStrategy",
    "FixedDelayStrategy",
    "ExponentialBackoffStrategy",
    "TenacityDelayStrategy",
    "fixed",
    "exponential_backoff",
    "RetryConfig",
    "RetrySettings",
    "StrategyKind",
    "strategy_from_config",
]
