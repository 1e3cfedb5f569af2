"""
Monitoring engine: lifecycle state machine and the sampling cycle.
"""
import asyncio
import time
from typing import Awaitable, Callable, Dict, Optional, Tuple

from .scheduler import AnalysisScheduler
from .stores import HistoryStore, AlertStore
from .zones import ZoneRegistry
from ..domain.entities import (
    AnalysisResult, Alert, DensityLevel, EngineState, FailureReport,
    TrafficFlow, ZoneContext, ZoneData
)
from ..domain.protocols import FrameCapture, VisionAnalyzer, FailureReporter
from ..domain.rules import AlertRuleEngine
from ..infrastructure.reporting import LoggingFailureReporter
from ...common.exceptions import AnalysisServiceError
from ...common.logging import setup_logger
from ...common.metrics import MetricsCollector
from ...common.schemas.analysis import ANALYSIS_INSTRUCTION, AnalysisPayload, parse_analysis_payload

EngineListener = Callable[["MonitoringEngine"], Awaitable[None]]


class MonitoringEngine:
    """
    Owns the engine state, the bounded stores and the scheduler.

    Presentation code reads immutable snapshots and drives start()/stop();
    the cycle completion step is the only writer of history and alerts.
    """

    def __init__(
        self,
        capture: FrameCapture,
        analyzer: VisionAnalyzer,
        reporter: Optional[FailureReporter] = None,
        history: Optional[HistoryStore] = None,
        alert_store: Optional[AlertStore] = None,
        rules: Optional[AlertRuleEngine] = None,
        zones: Optional[ZoneRegistry] = None,
        interval_seconds: float = 5.0,
        analysis_timeout: float = 20.0,
        clock: Callable[[], float] = time.time,
        metrics_collector: Optional[MetricsCollector] = None,
        listener: Optional[EngineListener] = None
    ):
        self.capture = capture
        self.analyzer = analyzer
        self.reporter = reporter or LoggingFailureReporter()
        self.history = history or HistoryStore()
        self.alert_store = alert_store or AlertStore()
        self.rules = rules or AlertRuleEngine(clock=clock)
        self.zones = zones or ZoneRegistry()
        self.analysis_timeout = analysis_timeout
        self.clock = clock
        self.metrics_collector = metrics_collector or MetricsCollector()
        self.listener = listener
        self.logger = setup_logger(__name__)

        self.scheduler = AnalysisScheduler(
            cycle=self.run_cycle,
            interval_seconds=interval_seconds,
            metrics_collector=self.metrics_collector
        )

        self._state = EngineState.IDLE
        self._last_timestamp = float("-inf")
        self.last_failure: Optional[FailureReport] = None
        # Zone the most recent cycle was attributed to, fixed when the cycle starts
        self.last_cycle_zone: Optional[str] = None

    @property
    def state(self) -> EngineState:
        return self._state

    def start(self) -> bool:
        """
        Idle -> Running. Returns False (and changes nothing) if already running.
        """
        if self._state is EngineState.RUNNING:
            self.logger.info("Engine already running; start ignored")
            return False
        self.scheduler.start()
        self._state = EngineState.RUNNING
        self.logger.info("Engine started")
        return True

    def stop(self) -> bool:
        """
        Running -> Idle. Returns False if already idle.
        """
        if self._state is EngineState.IDLE:
            return False
        self.scheduler.stop()
        self._state = EngineState.IDLE
        self.logger.info("Engine stopped")
        return True

    async def shutdown(self):
        """Stops sampling, waits for the in-flight cycle and releases collaborators."""
        self.stop()
        await self.scheduler.wait_idle()
        try:
            await self.analyzer.aclose()
        finally:
            self.capture.release()

    async def run_cycle(self) -> Optional[AnalysisResult]:
        """
        One capture -> analyze -> store pass. Failures abandon the cycle
        without touching history or alerts and never propagate.
        """
        started = time.perf_counter()
        self.metrics_collector.record_cycle_started()
        zone = self.zones.current
        self.last_cycle_zone = zone.current_zone_id

        try:
            frame = await self.capture.capture_frame()
            response = await self._analyze(frame)
            payload = parse_analysis_payload(response)
            result = self._accept(payload, zone)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._report_failure(e)
            await self._notify()
            return None

        self.history.append(result)
        self._last_timestamp = result.timestamp

        alert = self.rules.evaluate(result, zone)
        if alert is not None:
            self.alert_store.record(alert)
            self.logger.warning(
                f"{alert.severity.value} {alert.type.value} alert in {alert.zone}: {alert.message}"
            )

        if self.last_failure is not None:
            self.logger.info(f"Recovered after {self.last_failure.kind}")
        self.last_failure = None

        self.metrics_collector.record_cycle_succeeded(
            (time.perf_counter() - started) * 1000.0,
            alert_raised=alert is not None
        )
        await self._notify()
        return result

    async def _analyze(self, frame: bytes):
        try:
            return await asyncio.wait_for(
                self.analyzer.analyze(frame, ANALYSIS_INSTRUCTION),
                timeout=self.analysis_timeout
            )
        except asyncio.TimeoutError as e:
            raise AnalysisServiceError(
                f"Analysis timed out after {self.analysis_timeout:.1f}s"
            ) from e

    def _accept(self, payload: AnalysisPayload, zone: ZoneContext) -> AnalysisResult:
        # Timestamps are assigned here and clamped so they never regress
        timestamp = max(self.clock(), self._last_timestamp)
        return AnalysisResult(
            people_count=payload.people_count,
            vehicle_count=payload.vehicle_count,
            density=DensityLevel(payload.density),
            flow=TrafficFlow(payload.flow),
            risk_score=payload.risk_score,
            summary=payload.summary,
            prediction=payload.prediction,
            timestamp=timestamp,
            zone_id=zone.current_zone_id
        )

    def _report_failure(self, error: Exception):
        failure = FailureReport(
            kind=type(error).__name__,
            message=str(error),
            timestamp=self.clock()
        )
        self.last_failure = failure
        self.metrics_collector.record_cycle_failed()
        try:
            self.reporter.report(failure)
        except Exception as e:
            self.logger.error(f"Failure reporter raised: {e}", exc_info=True)

    async def _notify(self):
        if self.listener is None:
            return
        try:
            await self.listener(self)
        except Exception as e:
            self.logger.error(f"Engine listener failed: {e}", exc_info=True)

    def history_snapshot(self) -> Tuple[AnalysisResult, ...]:
        return self.history.snapshot()

    def latest(self) -> Optional[AnalysisResult]:
        return self.history.latest()

    def alerts(self) -> Tuple[Alert, ...]:
        return self.alert_store.all()

    def zone_data(self, zone_id: Optional[str] = None) -> ZoneData:
        zone_id = zone_id or self.zones.current.current_zone_id
        return self.zones.zone_data(zone_id, self.history.snapshot())

    def select_zone(self, zone_id: str) -> ZoneContext:
        context = self.zones.select(zone_id)
        self.logger.info(f"Now attributing samples to zone {zone_id}")
        return context

    def status(self) -> Dict:
        latest = self.history.latest()
        return {
            'state': self._state.value,
            'interval_seconds': self.scheduler.interval_seconds,
            'cycle_in_flight': self.scheduler.in_flight,
            'current_zone': self.zones.current.current_zone_id,
            'cycle_zone': self.last_cycle_zone,
            'history_size': len(self.history),
            'history_capacity': self.history.capacity,
            'alert_count': len(self.alert_store),
            'alert_capacity': self.alert_store.capacity,
            'critical_alerts': self.alert_store.count_by_severity().get('CRITICAL', 0),
            'latest': latest.to_dict() if latest else None,
            'last_failure': self.last_failure.to_dict() if self.last_failure else None
        }
