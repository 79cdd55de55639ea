"""Sequential retry executor.

Runs an ordered list of steps one after another. A step that fails is retried
after the delay chosen by the strategy until it succeeds, is skipped, the
strategy stops retrying it, or the run is cancelled. Every failure, and the
cancellation reason when the run is cut short by the signal, is recorded in
the returned execution log.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

import structlog

from ..domain.exceptions import InvalidStepError
from ..observability.logging.correlation import bind_run_id, generate_run_id
from .cancellation import CancellationSignal
from .config import RetryConfig, RetrySettings
from .context import ExecutionContext
from .outcomes import SUCCESS, Cancel, Failure, Outcome, Skip, Success
from .strategies import DelayStrategy, Wait, normalize_delay

logger = structlog.get_logger()

StepResult = Outcome | None
Step = Callable[[ExecutionContext], StepResult | Awaitable[StepResult]]


@dataclass
class StepState:
    """Position in the step sequence.

    ``failures`` counts consecutive failures of the current step only and is
    reset by ``advance()``.
    """

    index: int = 0
    failures: int = 0
    attempts: int = 0

    def advance(self) -> None:
        self.index += 1
        self.failures = 0
        self.attempts = 0


@dataclass
class RunReport:
    """Everything observed during one run."""

    run_id: str
    total_steps: int
    errors: list[Exception] = field(default_factory=list)
    steps_completed: int = 0
    skipped_steps: list[int] = field(default_factory=list)
    exhausted_steps: list[int] = field(default_factory=list)
    attempts: int = 0
    total_delay: float = 0.0
    stopped_at: int | None = None
    cancelled: bool = False
    aborted: bool = False

    @property
    def clean(self) -> bool:
        """True when every step succeeded without a single recorded error."""
        return not self.errors

    def get_metrics(self) -> dict[str, Any]:
        """Get run metrics."""
        return {
            "run_id": self.run_id,
            "total_steps": self.total_steps,
            "steps_completed": self.steps_completed,
            "attempts": self.attempts,
            "errors": len(self.errors),
            "skipped_steps": len(self.skipped_steps),
            "exhausted_steps": len(self.exhausted_steps),
            "total_delay": round(self.total_delay, 6),
            "stopped_at": self.stopped_at,
            "cancelled": self.cancelled,
            "aborted": self.aborted,
        }


class RetryExecutor:
    """Executes steps in order, retrying failures according to a strategy."""

    def __init__(self, strategy: DelayStrategy, interrupt_steps: bool = False):
        """Initialize retry executor.

        Args:
            strategy: Maps a step's consecutive failure count to ``Wait`` or ``Stop``
            interrupt_steps: Cancel a running step as soon as the signal fires
                instead of waiting for it to return
        """
        if not callable(strategy):
            raise TypeError(f"strategy must be callable, got {type(strategy).__name__}")
        self.strategy = strategy
        self.interrupt_steps = interrupt_steps

    @classmethod
    def from_config(cls, config: RetryConfig) -> "RetryExecutor":
        """Create an executor from a retry configuration."""
        return cls(config.build_strategy(), interrupt_steps=config.interrupt_steps)

    @classmethod
    def from_settings(cls, settings: RetrySettings | None = None) -> "RetryExecutor":
        """Create an executor from environment-driven settings."""
        settings = settings or RetrySettings()
        return cls.from_config(settings.get_retry_config())

    async def execute(
        self, signal: CancellationSignal, steps: Sequence[Step]
    ) -> list[Exception]:
        """Run ``steps`` and return the execution log."""
        report = await self.execute_with_report(signal, steps)
        return report.errors

    async def execute_with_report(
        self, signal: CancellationSignal, steps: Sequence[Step]
    ) -> RunReport:
        """Run ``steps`` and return the full run report."""
        steps = list(steps)
        for index, step in enumerate(steps):
            if not callable(step):
                raise InvalidStepError(
                    f"Step {index} is not callable: {type(step).__name__}", index
                )

        report = RunReport(run_id=generate_run_id(), total_steps=len(steps))
        with bind_run_id(report.run_id):
            logger.debug(
                "Starting run",
                total_steps=report.total_steps,
                strategy=repr(self.strategy),
            )
            await self._run(signal, steps, report)
            logger.debug("Run finished", **report.get_metrics())
        return report

    async def _run(
        self,
        signal: CancellationSignal,
        steps: list[Step],
        report: RunReport,
    ) -> None:
        loop = asyncio.get_running_loop()
        state = StepState()

        while state.index < len(steps):
            if signal.cancelled:
                self._record_cancellation(signal, state, report)
                return

            state.attempts += 1
            report.attempts += 1
            context = ExecutionContext(
                signal=signal,
                run_id=report.run_id,
                step_index=state.index,
                attempt=state.attempts,
                failures=state.failures,
            )
            outcome = await self._invoke(steps[state.index], context, signal)

            if outcome is None:
                logger.info("Step interrupted by cancellation", step=state.index)
                self._record_cancellation(signal, state, report)
                return

            if isinstance(outcome, Cancel):
                logger.info("Step cancelled the run", step=state.index)
                report.aborted = True
                report.stopped_at = state.index
                return

            if isinstance(outcome, Failure):
                report.errors.append(outcome.error)
                state.failures += 1
                delay = normalize_delay(self.strategy(state.failures), state.failures)

                if isinstance(delay, Wait):
                    logger.warning(
                        "Step failed, retrying",
                        step=state.index,
                        failures=state.failures,
                        delay=delay.seconds,
                        error_type=type(outcome.error).__name__,
                        error_message=str(outcome.error),
                    )
                    started = loop.time()
                    cancelled = await self._wait(signal, delay.seconds)
                    report.total_delay += loop.time() - started
                    if cancelled:
                        self._record_cancellation(signal, state, report)
                        return
                    continue

                logger.info(
                    "Retries exhausted, moving to next step",
                    step=state.index,
                    failures=state.failures,
                    error_type=type(outcome.error).__name__,
                )
                report.exhausted_steps.append(state.index)

            elif isinstance(outcome, Skip):
                logger.info("Step skipped", step=state.index)
                report.skipped_steps.append(state.index)

            elif state.failures:
                logger.info(
                    "Step succeeded after retries",
                    step=state.index,
                    failures=state.failures,
                )

            report.steps_completed += 1
            if signal.cancelled:
                self._record_cancellation(signal, state, report)
                return
            state.advance()

    async def _invoke(
        self,
        step: Step,
        context: ExecutionContext,
        signal: CancellationSignal,
    ) -> Outcome | None:
        """Call a step; None means the signal interrupted it."""
        if not self.interrupt_steps:
            return await self._call_step(step, context)

        step_task = asyncio.ensure_future(self._call_step(step, context))
        signal_task = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {step_task, signal_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            signal_task.cancel()
            if not step_task.done():
                step_task.cancel()

        if step_task in done:
            return step_task.result()

        await asyncio.wait({step_task})
        if not step_task.cancelled():
            error = step_task.exception()
            if error is not None:
                raise error
        return None

    async def _call_step(self, step: Step, context: ExecutionContext) -> Outcome:
        try:
            result = step(context)
            if inspect.isawaitable(result):
                result = await result
        except Exception as error:
            return Failure(error)

        if result is None:
            return SUCCESS
        if isinstance(result, Success | Failure | Skip | Cancel):
            return result
        raise InvalidStepError(
            f"Step {context.step_index} returned {type(result).__name__}, "
            "expected an outcome or None",
            context.step_index,
        )

    async def _wait(self, signal: CancellationSignal, seconds: float) -> bool:
        """Wait ``seconds`` unless the signal fires first; True if it fired."""
        if signal.cancelled:
            return True
        try:
            await asyncio.wait_for(signal.wait(), timeout=seconds)
        except TimeoutError:
            return False
        return True

    def _record_cancellation(
        self,
        signal: CancellationSignal,
        state: StepState,
        report: RunReport,
    ) -> None:
        reason = signal.reason
        if reason is None:
            raise RuntimeError(
                "Cancellation recorded for a signal that was not asserted"
            )
        report.errors.append(reason)
        report.cancelled = True
        report.stopped_at = state.index
        logger.info(
            "Run cancelled",
            step=state.index,
            reason=str(reason),
            reason_type=type(reason).__name__,
        )


async def run(
    signal: CancellationSignal, strategy: DelayStrategy, *steps: Step
) -> list[Exception]:
    """Execute ``steps`` in order under ``signal`` and return the execution log.

    An empty log means every step succeeded on its first attempt.
    """
    return await RetryExecutor(strategy).execute(signal, steps)


async def do(strategy: DelayStrategy, *steps: Step) -> list[Exception]:
    """Execute ``steps`` with a signal nobody will cancel."""
    return await run(CancellationSignal(), strategy, *steps)
