"""Domain models and exceptions."""

from .exceptions import (
    DeadlineExceededError,
    InvalidDelayError,
    InvalidStepError,
    RunCancelledError,
    StepRetryException,
)
from .models import ErrorCode

__all__ = [
    "ErrorCode",
    "StepRetryException",
    "RunCancelledError",
    "DeadlineExceededError",
    "InvalidDelayError",
    "InvalidStepError",
]
