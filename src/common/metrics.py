from dataclasses import dataclass
from typing import Dict, List
import time

@dataclass
class MonitoringMetrics:
    """Sampling loop metrics"""
    uptime_seconds: float
    cycles_started: int
    cycles_succeeded: int
    cycles_failed: int
    ticks_skipped: int
    alerts_raised: int
    avg_cycle_time_ms: float

    def to_dict(self) -> Dict:
        return {
            'uptime_seconds': self.uptime_seconds,
            'cycles_started': self.cycles_started,
            'cycles_succeeded': self.cycles_succeeded,
            'cycles_failed': self.cycles_failed,
            'ticks_skipped': self.ticks_skipped,
            'alerts_raised': self.alerts_raised,
            'avg_cycle_time_ms': self.avg_cycle_time_ms
        }


class MetricsCollector:
    """Collects and aggregates sampling loop metrics"""

    def __init__(self, max_samples: int = 1000):
        self.max_samples = max_samples
        self.cycle_times: List[float] = []
        self.cycles_started = 0
        self.cycles_succeeded = 0
        self.cycles_failed = 0
        self.ticks_skipped = 0
        self.alerts_raised = 0
        self.start_time = time.time()

    def record_cycle_started(self):
        self.cycles_started += 1

    def record_cycle_succeeded(self, duration_ms: float, alert_raised: bool):
        self.cycles_succeeded += 1
        if alert_raised:
            self.alerts_raised += 1
        self.cycle_times.append(duration_ms)
        # Keep buffer size manageable
        if len(self.cycle_times) > self.max_samples:
            self.cycle_times.pop(0)

    def record_cycle_failed(self):
        self.cycles_failed += 1

    def record_tick_skipped(self):
        self.ticks_skipped += 1

    def get_metrics(self) -> MonitoringMetrics:
        avg_cycle = sum(self.cycle_times) / len(self.cycle_times) if self.cycle_times else 0.0

        return MonitoringMetrics(
            uptime_seconds=time.time() - self.start_time,
            cycles_started=self.cycles_started,
            cycles_succeeded=self.cycles_succeeded,
            cycles_failed=self.cycles_failed,
            ticks_skipped=self.ticks_skipped,
            alerts_raised=self.alerts_raised,
            avg_cycle_time_ms=avg_cycle
        )
