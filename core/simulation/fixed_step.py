"""Fixed-timestep driving and time-windowed gating.

Both helpers are clock-agnostic: callers pass the elapsed or current time,
which keeps them deterministic under test.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from core.events import EatenEvent

logger = logging.getLogger(__name__)


@dataclass
class StepBatch:
    """Result of one ``FixedStepDriver.advance`` call."""

    steps: int
    events: List[EatenEvent]
    backlog_steps: int = 0


class FixedStepDriver:
    """Accumulates wall-clock time and runs whole fixed steps.

    Never runs a partial step and never skips one: leftover time stays in the
    accumulator for the next call. At most ``max_steps`` run per call; any
    further owed steps are carried over and run by later calls.

    Args:
        step_fn: Runs one step of ``dt`` seconds and returns its events.
        dt: Fixed step length in seconds.
        max_steps: Catch-up limit per call.
    """

    def __init__(
        self,
        step_fn: Callable[[float], List[EatenEvent]],
        dt: float,
        max_steps: int = 30,
    ) -> None:
        self._step_fn = step_fn
        self.dt = dt
        self.max_steps = max_steps
        self.accumulator = 0.0
        self.total_steps = 0

    @property
    def backlog_steps(self) -> int:
        """Whole steps owed but not yet run."""
        return int((self.accumulator + 1e-9) // self.dt)

    def advance(self, elapsed: float) -> StepBatch:
        if elapsed > 0:
            self.accumulator += elapsed

        events: List[EatenEvent] = []
        steps = 0
        # Small epsilon so float drift doesn't postpone a step that is due
        while self.accumulator + 1e-9 >= self.dt and steps < self.max_steps:
            events.extend(self._step_fn(self.dt))
            self.accumulator -= self.dt
            steps += 1

        self.accumulator = max(self.accumulator, 0.0)
        self.total_steps += steps

        backlog = self.backlog_steps
        if backlog:
            logger.warning(
                "Simulation behind: %d steps carried over after %d catch-up steps",
                backlog,
                steps,
            )
        return StepBatch(steps=steps, events=events, backlog_steps=backlog)


class IntervalGate:
    """Opens at most once per ``interval`` seconds."""

    def __init__(self, interval: float) -> None:
        self.interval = interval
        self._last_open: Optional[float] = None

    def ready(self, now: float) -> bool:
        if self._last_open is not None and now - self._last_open < self.interval:
            return False
        self._last_open = now
        return True
