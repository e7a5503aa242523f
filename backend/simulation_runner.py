"""Background simulation driver task.

The runner is a single asyncio task on the server's event loop. Each wakeup
it measures elapsed wall-clock time, runs every whole fixed step that has
accrued, queues the resulting eaten events, then offers a snapshot to the
broadcast gate. Sending happens in per-client tasks, so the loop never waits
on the network. Steps run synchronously, so a tick is never interleaved with
request handling.
"""

import asyncio
import logging
import time
from contextlib import suppress
from typing import Callable, Optional

from backend.broadcast import Broadcaster
from backend.connection_manager import handle_task_exception
from backend.world_state import WorldState
from core.config.simulation_config import SimulationConfig
from core.simulation import FixedStepDriver, StepBatch

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Drives the engine at a fixed rate and feeds the broadcaster."""

    def __init__(
        self,
        world_state: WorldState,
        broadcaster: Broadcaster,
        config: SimulationConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.world_state = world_state
        self.broadcaster = broadcaster
        self.config = config
        self._clock = clock
        self.driver = FixedStepDriver(
            world_state.engine.step,
            dt=config.dt,
            max_steps=config.max_catch_up_steps,
        )
        self._task: Optional[asyncio.Task] = None
        self._last_time: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self, now: Optional[float] = None) -> StepBatch:
        """Advance by the time elapsed since the previous call and publish.

        Never awaits: outgoing messages are only queued.
        """
        now = self._clock() if now is None else now
        elapsed = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now

        batch = self.driver.advance(elapsed)
        if batch.events:
            self.broadcaster.publish_eaten(batch.events)
        if batch.steps:
            self.broadcaster.publish_state(now)
        return batch

    async def _run(self) -> None:
        logger.info(
            "Simulation loop started: %.0f Hz ticks, %.0f Hz snapshots",
            self.config.tick_hz,
            self.config.broadcast_hz,
        )
        delay = self.config.dt
        try:
            while True:
                await asyncio.sleep(delay)
                batch = self.run_once()
                if batch.steps > 1:
                    logger.debug("Caught up %d steps in one batch", batch.steps)
                # Owed steps run on the next pass, after yielding to the loop
                delay = 0 if batch.backlog_steps else self.config.dt
        except asyncio.CancelledError:
            logger.info("Simulation loop cancelled")
            raise

    def start(self) -> asyncio.Task:
        if self.running:
            return self._task
        self._last_time = self._clock()
        self._task = asyncio.create_task(self._run(), name="simulation_loop")
        self._task.add_done_callback(handle_task_exception)
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
