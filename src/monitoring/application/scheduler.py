"""
Fixed-interval scheduler driving the sampling cycles.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional

from ...common.logging import setup_logger
from ...common.metrics import MetricsCollector


class AnalysisScheduler:
    """
    Free-running timer: tick k fires at start + k * interval, measured from the
    scheduled times rather than from cycle completion.

    Overlap policy is skip-if-busy: a tick that arrives while the previous
    cycle is still in flight is dropped, so at most one cycle (and one
    outbound analysis request) runs at a time.
    """

    def __init__(
        self,
        cycle: Callable[[], Awaitable[Any]],
        interval_seconds: float = 5.0,
        metrics_collector: Optional[MetricsCollector] = None
    ):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.cycle = cycle
        self.interval_seconds = interval_seconds
        self.metrics_collector = metrics_collector
        self.logger = setup_logger(__name__)

        self.ticks_fired = 0
        self.ticks_skipped = 0
        self._timer_task: Optional[asyncio.Task] = None
        self._in_flight: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    def start(self):
        """Starts ticking. Must be called from a running event loop."""
        if self.is_running:
            self.logger.warning("Scheduler already running; start ignored")
            return
        loop = asyncio.get_running_loop()
        self._timer_task = loop.create_task(self._run(), name="AnalysisScheduler")
        self.logger.info(f"Scheduler started (interval={self.interval_seconds:.2f}s)")

    def stop(self):
        """
        Cancels the timer. No tick fires after this returns; a cycle already in
        flight is left to finish.
        """
        if self._timer_task is None:
            return
        self._timer_task.cancel()
        self._timer_task = None
        self.logger.info("Scheduler stopped")

    async def _run(self):
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self.interval_seconds

        while True:
            delay = next_tick - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)

            self.fire()

            next_tick += self.interval_seconds
            now = loop.time()
            if next_tick <= now:
                # Loop was blocked past one or more slots; realign instead of bursting
                missed = int((now - next_tick) // self.interval_seconds) + 1
                next_tick += missed * self.interval_seconds
                self.logger.warning(f"Scheduler fell behind, dropped {missed} tick(s)")

    def fire(self) -> Optional[asyncio.Task]:
        """
        Executes one tick. Returns the cycle task, or None if the tick was
        skipped because a cycle is still in flight.
        """
        if self.in_flight:
            self.ticks_skipped += 1
            if self.metrics_collector:
                self.metrics_collector.record_tick_skipped()
            self.logger.warning("Previous cycle still in flight; skipping tick")
            return None

        self.ticks_fired += 1
        loop = asyncio.get_running_loop()
        self._in_flight = loop.create_task(self._guarded_cycle(), name=f"SamplingCycle-{self.ticks_fired}")
        return self._in_flight

    async def _guarded_cycle(self):
        try:
            await self.cycle()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.logger.error(f"Sampling cycle raised unexpectedly: {e}", exc_info=True)

    async def wait_idle(self):
        """Waits for the in-flight cycle, if any, to complete."""
        if self._in_flight is not None:
            await asyncio.gather(self._in_flight, return_exceptions=True)
