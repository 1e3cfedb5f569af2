import asyncio
import pytest
from src.common.metrics import MetricsCollector
from src.monitoring.application.scheduler import AnalysisScheduler


class RecordingCycle:
    def __init__(self, duration=0.0, fail=False):
        self.duration = duration
        self.fail = fail
        self.started_at = []
        self.active = 0
        self.max_active = 0

    async def __call__(self):
        loop = asyncio.get_running_loop()
        self.started_at.append(loop.time())
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.duration:
                await asyncio.sleep(self.duration)
            if self.fail:
                raise RuntimeError("boom")
        finally:
            self.active -= 1


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        AnalysisScheduler(RecordingCycle(), interval_seconds=0)


def test_start_requires_running_loop():
    scheduler = AnalysisScheduler(RecordingCycle(), interval_seconds=1.0)
    with pytest.raises(RuntimeError):
        scheduler.start()
    assert not scheduler.is_running


@pytest.mark.asyncio
async def test_fire_skips_while_cycle_in_flight():
    cycle = RecordingCycle(duration=0.05)
    metrics = MetricsCollector()
    scheduler = AnalysisScheduler(cycle, interval_seconds=1.0, metrics_collector=metrics)

    first = scheduler.fire()
    second = scheduler.fire()

    assert first is not None
    assert second is None
    assert scheduler.in_flight
    assert scheduler.ticks_skipped == 1
    assert metrics.ticks_skipped == 1

    await scheduler.wait_idle()
    assert not scheduler.in_flight
    assert scheduler.fire() is not None
    await scheduler.wait_idle()
    assert len(cycle.started_at) == 2


@pytest.mark.asyncio
async def test_failing_cycle_does_not_break_scheduler():
    cycle = RecordingCycle(fail=True)
    scheduler = AnalysisScheduler(cycle, interval_seconds=0.02)

    scheduler.start()
    await asyncio.sleep(0.11)
    scheduler.stop()
    await scheduler.wait_idle()

    assert len(cycle.started_at) >= 3


@pytest.mark.asyncio
async def test_ticks_follow_fixed_interval():
    cycle = RecordingCycle(duration=0.02)
    scheduler = AnalysisScheduler(cycle, interval_seconds=0.05)

    scheduler.start()
    await asyncio.sleep(0.33)
    scheduler.stop()
    await scheduler.wait_idle()

    ticks = cycle.started_at
    assert len(ticks) >= 4
    # Free-running: spacing is the interval itself, not interval + cycle duration
    mean_spacing = (ticks[-1] - ticks[0]) / (len(ticks) - 1)
    assert 0.04 <= mean_spacing <= 0.065


@pytest.mark.asyncio
async def test_slow_cycles_are_never_overlapped():
    cycle = RecordingCycle(duration=0.12)
    scheduler = AnalysisScheduler(cycle, interval_seconds=0.05)

    scheduler.start()
    await asyncio.sleep(0.4)
    scheduler.stop()
    await scheduler.wait_idle()

    assert cycle.max_active == 1
    assert scheduler.ticks_skipped >= 1


@pytest.mark.asyncio
async def test_double_start_keeps_single_timer():
    scheduler = AnalysisScheduler(RecordingCycle(), interval_seconds=10.0)

    scheduler.start()
    timer = scheduler._timer_task
    scheduler.start()

    assert scheduler._timer_task is timer
    scheduler.stop()


@pytest.mark.asyncio
async def test_no_tick_after_stop():
    cycle = RecordingCycle()
    scheduler = AnalysisScheduler(cycle, interval_seconds=0.02)

    scheduler.start()
    await asyncio.sleep(0.05)
    scheduler.stop()
    fired = len(cycle.started_at)

    await asyncio.sleep(0.1)

    assert not scheduler.is_running
    assert len(cycle.started_at) == fired


@pytest.mark.asyncio
async def test_stop_before_first_tick():
    cycle = RecordingCycle()
    scheduler = AnalysisScheduler(cycle, interval_seconds=0.02)

    scheduler.start()
    scheduler.stop()
    await asyncio.sleep(0.08)

    assert cycle.started_at == []


@pytest.mark.asyncio
async def test_in_flight_cycle_finishes_after_stop():
    cycle = RecordingCycle(duration=0.05)
    scheduler = AnalysisScheduler(cycle, interval_seconds=1.0)

    task = scheduler.fire()
    scheduler.stop()
    await scheduler.wait_idle()

    assert task.done() and not task.cancelled()
    assert cycle.active == 0
