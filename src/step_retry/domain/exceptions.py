"""Exception hierarchy for step-retry."""

from typing import Any

from .models import ErrorCode


class StepRetryException(Exception):
    """Base exception for step-retry."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class RunCancelledError(StepRetryException):
    """Recorded in the execution log when a run is cancelled externally."""

    def __init__(
        self,
        message: str = "canceled",
        error_code: ErrorCode = ErrorCode.CANCELLED,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, error_code, details)


class DeadlineExceededError(RunCancelledError):
    """Recorded in the execution log when a signal's deadline fires."""

    def __init__(self, timeout: float):
        super().__init__(
            "deadline exceeded",
            ErrorCode.DEADLINE_EXCEEDED,
            {"timeout": timeout},
        )
        self.timeout = timeout


class InvalidDelayError(StepRetryException):
    """A delay strategy produced something that is not a valid delay."""

    def __init__(self, value: Any, failures: int):
        super().__init__(
            f"Invalid delay {value!r} for failure count {failures}",
            ErrorCode.INVALID_DELAY,
            {"value": repr(value), "failures": failures},
        )
        self.value = value
        self.failures = failures


class InvalidStepError(StepRetryException):
    """A step is not callable or returned an unrecognised value."""

    def __init__(self, message: str, step_index: int):
        super().__init__(message, ErrorCode.INVALID_STEP, {"step_index": step_index})
        self.step_index = step_index
