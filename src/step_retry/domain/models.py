"""Domain models shared across the library."""

from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes."""

    CANCELLED = "cancelled"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    INVALID_DELAY = "invalid_delay"
    INVALID_STEP = "invalid_step"
