"""Step outcomes.

A step reports what happened through one of four variants. ``Skip`` and
``Cancel`` carry orchestration meaning rather than describing a fault, so
they are distinct types instead of special error values.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    """The step completed; advance to the next one."""


@dataclass(frozen=True)
class Failure:
    """The step failed with an ordinary error; record it and retry."""

    error: Exception

    def __post_init__(self) -> None:
        if not isinstance(self.error, Exception):
            raise TypeError(
                f"Failure expects an Exception, got {type(self.error).__name__}"
            )


@dataclass(frozen=True)
class Skip:
    """Treat the step as satisfied without recording or retrying."""


@dataclass(frozen=True)
class Cancel:
    """Abort the whole run now."""


Outcome = Success | Failure | Skip | Cancel

SUCCESS = Success()
SKIP = Skip()
CANCEL = Cancel()
