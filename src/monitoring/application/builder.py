from omegaconf import DictConfig
from typing import Dict, Optional

from ..domain import FrameCapture, VisionAnalyzer, FailureReporter, AlertThresholds, AlertRuleEngine
from ..infrastructure.capture import create_capture
from ..infrastructure.analyzers import GeminiAnalyzer
from ..infrastructure.reporting import LoggingFailureReporter
from ..infrastructure.broadcast import RealtimeBroadcaster
from .stores import HistoryStore, AlertStore
from .zones import ZoneRegistry
from .engine import MonitoringEngine
from ...common.logging import setup_logger
from ...common.metrics import MetricsCollector


class MonitoringApplicationBuilder:
    """
    Builder pattern for constructing the monitoring engine.
    Centralizes component instantiation and wiring.
    """

    def __init__(self, config: DictConfig):
        self.config = config
        self.metrics_collector = MetricsCollector()
        self.logger = setup_logger(__name__)

        # Components
        self.capture: Optional[FrameCapture] = None
        self.analyzer: Optional[VisionAnalyzer] = None
        self.reporter: Optional[FailureReporter] = None
        self.broadcaster: Optional[RealtimeBroadcaster] = None
        self.zones: Optional[ZoneRegistry] = None
        self.engine: Optional[MonitoringEngine] = None

    def build_capture(self) -> 'MonitoringApplicationBuilder':
        capture_cfg = self.config.capture
        self.logger.info(f"Configuring capture source: {capture_cfg.source}")
        self.capture = create_capture(
            source=capture_cfg.source,
            target_width=capture_cfg.target_width,
            target_height=capture_cfg.target_height,
            jpeg_quality=capture_cfg.jpeg_quality,
            buffer_size=capture_cfg.buffer_size
        )
        return self

    def build_analyzer(self) -> 'MonitoringApplicationBuilder':
        analyzer_cfg = self.config.analyzer
        self.logger.info(f"Configuring analyzer model: {analyzer_cfg.model}")
        self.analyzer = GeminiAnalyzer(
            api_key=analyzer_cfg.api_key,
            model=analyzer_cfg.model,
            base_url=analyzer_cfg.base_url,
            timeout=self.config.sampling.analysis_timeout_seconds
        )
        return self

    def build_reporter(self) -> 'MonitoringApplicationBuilder':
        self.reporter = LoggingFailureReporter()
        return self

    def build_broadcaster(self) -> 'MonitoringApplicationBuilder':
        self.broadcaster = RealtimeBroadcaster()
        return self

    def build_zones(self) -> 'MonitoringApplicationBuilder':
        zones = {zone.id: zone.name for zone in self.config.zones}
        self.zones = ZoneRegistry(zones, current_zone=self.config.get('current_zone'))
        return self

    def build_engine(self) -> MonitoringEngine:
        if not self.capture:
            self.build_capture()
        if not self.analyzer:
            self.build_analyzer()
        if not self.reporter:
            self.build_reporter()
        if not self.zones:
            self.build_zones()

        rules_cfg = self.config.rules
        thresholds = AlertThresholds(
            warning_risk=rules_cfg.warning_risk,
            critical_risk=rules_cfg.critical_risk,
            overcrowding_people=rules_cfg.overcrowding_people
        )

        self.engine = MonitoringEngine(
            capture=self.capture,
            analyzer=self.analyzer,
            reporter=self.reporter,
            history=HistoryStore(self.config.storage.history_capacity),
            alert_store=AlertStore(self.config.storage.alert_capacity),
            rules=AlertRuleEngine(thresholds),
            zones=self.zones,
            interval_seconds=self.config.sampling.interval_seconds,
            analysis_timeout=self.config.sampling.analysis_timeout_seconds,
            metrics_collector=self.metrics_collector,
            listener=self.broadcaster.publish if self.broadcaster else None
        )
        return self.engine

    def get_components(self) -> Dict:
        """Returns built components for external use (e.g. the API layer)"""
        return {
            'capture': self.capture,
            'analyzer': self.analyzer,
            'reporter': self.reporter,
            'broadcaster': self.broadcaster,
            'zones': self.zones,
            'metrics_collector': self.metrics_collector
        }
