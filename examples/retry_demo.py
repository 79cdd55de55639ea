"""Demonstration of sequential retry execution.

Shows fixed and exponential backoff strategies, skipping and cancelling
from inside a step, and cancelling a run from another thread.
"""

import asyncio
import random
import threading

from step_retry import (
    CANCEL,
    SKIP,
    CancellationSignal,
    ExecutionContext,
    Failure,
    RetryExecutor,
    do,
    exponential_backoff,
    fixed,
    run,
)
from step_retry.observability.logging import setup_development_logging


def even_number_step(name: str):
    """Create a step that only succeeds when it draws an even number."""

    async def step(ctx: ExecutionContext) -> Failure | None:
        await asyncio.sleep(0.01)  # Simulate some IO
        n = random.randint(0, 9)
        if n % 2:
            return Failure(ValueError(f"{name}: {n} is not an even number"))
        return None

    return step


async def optional_cache_warmup(ctx: ExecutionContext):
    """A step that decides it is not needed."""
    return SKIP


async def demo_fixed_delay():
    """Retry two flaky steps with a fixed delay."""
    print("\n=== Fixed Delay Demo ===")

    errors = await do(
        fixed(0.05),
        even_number_step("step 1"),
        optional_cache_warmup,
        even_number_step("step 2"),
    )
    print(f"Recorded {len(errors)} failures")
    for error in errors:
        print(f"  - {error}")


async def demo_exponential_backoff():
    """Give up on a broken step after three retries and move on."""
    print("\n=== Exponential Backoff Demo ===")

    async def broken(ctx: ExecutionContext):
        return Failure(ConnectionError(f"attempt {ctx.attempt} refused"))

    executor = RetryExecutor(exponential_backoff(3))
    report = await executor.execute_with_report(
        CancellationSignal(), [broken, even_number_step("after broken")]
    )
    print(f"Exhausted steps: {report.exhausted_steps}")
    print(f"Metrics: {report.get_metrics()}")


async def demo_step_cancel():
    """A step aborts the whole run."""
    print("\n=== Step Cancel Demo ===")

    async def abort(ctx: ExecutionContext):
        return CANCEL

    errors = await do(fixed(0.05), even_number_step("before abort"), abort)
    print(f"Run aborted with {len(errors)} recorded failures")


async def demo_external_cancel():
    """Cancel a run that would otherwise retry forever."""
    print("\n=== External Cancel Demo ===")

    async def never_works(ctx: ExecutionContext):
        return Failure(TimeoutError("upstream timed out"))

    signal = CancellationSignal()
    timer = threading.Timer(0.5, signal.cancel)
    timer.start()

    errors = await run(signal, fixed(0.2), never_works)
    print(f"Last entry: {errors[-1]!r} after {len(errors) - 1} failures")


async def main():
    """Run all demonstrations."""
    setup_development_logging()

    await demo_fixed_delay()
    await demo_exponential_backoff()
    await demo_step_cancel()
    await demo_external_cancel()


if __name__ == "__main__":
    asyncio.run(main())
