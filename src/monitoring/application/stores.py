"""
Bounded in-memory stores for accepted results and raised alerts.
"""
from collections import Counter, deque
from typing import Deque, Dict, Optional, Tuple

from ..domain.entities import AnalysisResult, Alert
from ...common.exceptions import ConfigurationError


class HistoryStore:
    """
    Oldest-first buffer of accepted results.
    Appending beyond capacity evicts from the head.
    """

    def __init__(self, capacity: int = 20):
        if capacity < 1:
            raise ConfigurationError(f"History capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._entries: Deque[AnalysisResult] = deque(maxlen=capacity)

    def append(self, result: AnalysisResult):
        self._entries.append(result)

    def latest(self) -> Optional[AnalysisResult]:
        return self._entries[-1] if self._entries else None

    def snapshot(self) -> Tuple[AnalysisResult, ...]:
        return tuple(self._entries)

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class AlertStore:
    """
    Newest-first buffer of alerts.
    Recording beyond capacity drops from the tail. No deduplication.
    """

    def __init__(self, capacity: int = 10):
        if capacity < 1:
            raise ConfigurationError(f"Alert capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._alerts: Deque[Alert] = deque(maxlen=capacity)

    def record(self, alert: Alert):
        self._alerts.appendleft(alert)

    def all(self) -> Tuple[Alert, ...]:
        return tuple(self._alerts)

    def count_by_severity(self) -> Dict[str, int]:
        counts = Counter(alert.severity.value for alert in self._alerts)
        return dict(counts)

    def clear(self):
        self._alerts.clear()

    def __len__(self) -> int:
        return len(self._alerts)
