"""
Domain entities for the zone monitoring module.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from ...common.exceptions import InvalidResult


class DensityLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class TrafficFlow(str, Enum):
    SMOOTH = "Smooth"
    MODERATE = "Moderate"
    CONGESTED = "Congested"
    STALLED = "Stalled"


class AlertType(str, Enum):
    CONGESTION = "CONGESTION"
    OVERCROWDING = "OVERCROWDING"
    SAFETY_RISK = "SAFETY_RISK"


class AlertSeverity(str, Enum):
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class EngineState(str, Enum):
    IDLE = "Idle"
    RUNNING = "Running"


@dataclass(frozen=True)
class AnalysisResult:
    """
    Aggregate snapshot of one sampled frame, accepted into history.
    """
    people_count: int
    vehicle_count: int
    density: DensityLevel
    flow: TrafficFlow
    risk_score: int  # 0-100
    summary: str
    prediction: str
    timestamp: float  # Assigned at acceptance, never by the analyzer
    zone_id: str

    def __post_init__(self):
        if self.people_count < 0 or self.vehicle_count < 0:
            raise InvalidResult(
                f"Counts must be non-negative (people={self.people_count}, vehicles={self.vehicle_count})"
            )
        if not 0 <= self.risk_score <= 100:
            raise InvalidResult(f"risk_score out of range [0, 100]: {self.risk_score}")

    def to_dict(self) -> Dict:
        return {
            'people_count': self.people_count,
            'vehicle_count': self.vehicle_count,
            'density': self.density.value,
            'flow': self.flow.value,
            'risk_score': self.risk_score,
            'summary': self.summary,
            'prediction': self.prediction,
            'timestamp': self.timestamp,
            'zone_id': self.zone_id
        }


@dataclass(frozen=True)
class Alert:
    """
    Alert derived from a single analysis result.
    """
    id: str
    timestamp: float
    type: AlertType
    severity: AlertSeverity
    message: str
    zone: str

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'type': self.type.value,
            'severity': self.severity.value,
            'message': self.message,
            'zone': self.zone
        }


@dataclass(frozen=True)
class ZoneContext:
    """
    Zone currently attributed to sampled frames.
    """
    current_zone_id: str


@dataclass(frozen=True)
class ZoneData:
    """
    A monitored area and the accepted results attributed to it.
    """
    id: str
    name: str
    history: Tuple[AnalysisResult, ...] = ()

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'history': [result.to_dict() for result in self.history]
        }


@dataclass(frozen=True)
class FailureReport:
    """
    Structured report of an abandoned sampling cycle.
    """
    kind: str  # Exception class name, e.g. CaptureUnavailable
    message: str
    timestamp: float

    def to_dict(self) -> Dict:
        return {
            'kind': self.kind,
            'message': self.message,
            'timestamp': self.timestamp
        }
