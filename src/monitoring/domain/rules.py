"""
Threshold-based alert rules.
"""
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from .entities import AnalysisResult, Alert, AlertType, AlertSeverity, ZoneContext

IdFactory = Callable[[], str]
Clock = Callable[[], float]


def new_alert_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class AlertThresholds:
    warning_risk: int = 75  # Alerts fire strictly above this score
    critical_risk: int = 90  # CRITICAL strictly above this score
    overcrowding_people: int = 10  # OVERCROWDING strictly above this count


def evaluate(
    result: AnalysisResult,
    zone_context: ZoneContext,
    thresholds: AlertThresholds = AlertThresholds(),
    id_factory: IdFactory = new_alert_id,
    clock: Clock = time.time
) -> Optional[Alert]:
    """
    Maps one accepted result to zero or one alert.

    Only the id and the timestamp come from the injected generators; everything
    else is derived from the result and the zone context.
    """
    if result.risk_score <= thresholds.warning_risk:
        return None

    if result.people_count > thresholds.overcrowding_people:
        alert_type = AlertType.OVERCROWDING
    else:
        alert_type = AlertType.CONGESTION

    if result.risk_score > thresholds.critical_risk:
        severity = AlertSeverity.CRITICAL
    else:
        severity = AlertSeverity.WARNING

    return Alert(
        id=id_factory(),
        timestamp=clock(),
        type=alert_type,
        severity=severity,
        message=f"{result.summary}. Prediction: {result.prediction}",
        zone=zone_context.current_zone_id
    )


class AlertRuleEngine:
    """
    Binds thresholds and id/clock sources to the rule evaluation.
    Never touches history or alert storage; the caller records the alert.
    """

    def __init__(
        self,
        thresholds: Optional[AlertThresholds] = None,
        id_factory: IdFactory = new_alert_id,
        clock: Clock = time.time
    ):
        self.thresholds = thresholds or AlertThresholds()
        self.id_factory = id_factory
        self.clock = clock

    def evaluate(self, result: AnalysisResult, zone_context: ZoneContext) -> Optional[Alert]:
        return evaluate(result, zone_context, self.thresholds, self.id_factory, self.clock)
