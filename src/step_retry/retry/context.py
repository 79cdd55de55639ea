"""Execution context handed to every step invocation."""

from dataclasses import dataclass

from .cancellation import CancellationSignal


@dataclass(frozen=True)
class ExecutionContext:
    """What a step knows about the run it is part of.

    Steps are not required to look at the signal, but long-running steps
    should check ``cancelled`` or await ``wait_cancelled()`` to stop early.
    """

    signal: CancellationSignal
    run_id: str
    step_index: int
    attempt: int
    failures: int

    @property
    def cancelled(self) -> bool:
        return self.signal.cancelled

    async def wait_cancelled(self) -> Exception:
        """Suspend until the run is cancelled and return the reason."""
        return await self.signal.wait()
