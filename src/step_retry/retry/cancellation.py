"""Broadcast-once cancellation signal."""

import asyncio
import threading

import structlog

from ..domain.exceptions import DeadlineExceededError, RunCancelledError

logger = structlog.get_logger()


class CancellationSignal:
    """A flag that can be asserted once, from any thread.

    The executor only reads the signal: it checks ``cancelled`` between steps
    and awaits ``wait()`` while delaying a retry. Callers assert it with
    ``cancel()``, optionally passing the exception that should be recorded in
    the execution log.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reason: Exception | None = None
        self._waiters: list[tuple[asyncio.AbstractEventLoop, asyncio.Event]] = []
        self._timer: threading.Timer | None = None

    @classmethod
    def with_timeout(cls, timeout: float) -> "CancellationSignal":
        """Create a signal that cancels itself after ``timeout`` seconds."""
        signal = cls()
        signal.cancel_after(timeout)
        return signal

    @property
    def cancelled(self) -> bool:
        return self._reason is not None

    @property
    def reason(self) -> Exception | None:
        """The exception recorded when the signal was asserted."""
        return self._reason

    def cancel(self, reason: Exception | None = None) -> bool:
        """Assert the signal.

        Returns False if it was already asserted; the first reason wins.
        """
        with self._lock:
            if self._reason is not None:
                return False
            self._reason = reason if reason is not None else RunCancelledError()
            waiters = self._waiters
            self._waiters = []
            timer = self._timer
            self._timer = None

        if timer is not None:
            timer.cancel()

        for loop, event in waiters:
            # Loops that already shut down have nobody left to wake.
            if not loop.is_closed():
                loop.call_soon_threadsafe(event.set)

        logger.debug(
            "Cancellation signal asserted",
            reason=str(self._reason),
            reason_type=type(self._reason).__name__,
            waiters=len(waiters),
        )
        return True

    def cancel_after(self, timeout: float) -> None:
        """Assert the signal with ``DeadlineExceededError`` after ``timeout`` seconds."""
        if timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")

        timer = threading.Timer(timeout, self.cancel, args=(DeadlineExceededError(timeout),))
        timer.daemon = True
        with self._lock:
            if self._reason is not None:
                return
            if self._timer is not None:
                self._timer.cancel()
            self._timer = timer
        timer.start()

    def close(self) -> None:
        """Stop a pending deadline timer without asserting the signal."""
        with self._lock:
            timer = self._timer
            self._timer = None
        if timer is not None:
            timer.cancel()

    async def wait(self) -> Exception:
        """Suspend until the signal is asserted and return its reason."""
        loop = asyncio.get_running_loop()
        event = asyncio.Event()
        with self._lock:
            if self._reason is not None:
                return self._reason
            self._waiters.append((loop, event))

        try:
            await event.wait()
        finally:
            with self._lock:
                if (loop, event) in self._waiters:
                    self._waiters.remove((loop, event))

        reason = self._reason
        if reason is None:
            raise RuntimeError("Cancellation signal woke without a reason")
        return reason

    def __enter__(self) -> "CancellationSignal":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = f"cancelled={self._reason!r}" if self.cancelled else "active"
        return f"CancellationSignal({state})"
