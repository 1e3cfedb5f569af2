"""
Domain module initialization.
"""
from .entities import (
    DensityLevel,
    TrafficFlow,
    AlertType,
    AlertSeverity,
    EngineState,
    AnalysisResult,
    Alert,
    ZoneContext,
    ZoneData,
    FailureReport
)
from .protocols import (
    FrameCapture,
    VisionAnalyzer,
    FailureReporter
)
from .rules import AlertThresholds, AlertRuleEngine, evaluate
