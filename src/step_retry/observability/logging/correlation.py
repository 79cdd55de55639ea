"""Run ID propagation for log events."""

import contextvars
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

# Context variable for the run currently executing in this task
run_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)


class RunIDProcessor:
    """Processor to add the current run ID to log events."""

    def __init__(self, run_id_key: str = "run_id"):
        self.run_id_key = run_id_key

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        """Add run ID to log event."""
        run_id = get_run_id()
        if run_id and self.run_id_key not in event_dict:
            event_dict[self.run_id_key] = run_id
        return event_dict


def get_run_id() -> str | None:
    """Get current run ID from context."""
    return run_id_var.get()


def generate_run_id() -> str:
    """Generate a new run ID."""
    return str(uuid.uuid4())


@contextmanager
def bind_run_id(run_id: str) -> Iterator[str]:
    """Set the run ID for the duration of the block."""
    token = run_id_var.set(run_id)
    try:
        yield run_id
    finally:
        run_id_var.reset(token)
