"""
Registry of monitored zones.
"""
from typing import Dict, Iterable, List, Optional

from ..domain.entities import AnalysisResult, ZoneContext, ZoneData
from ...common.exceptions import ConfigurationError

DEFAULT_ZONE_ID = "Primary Node A1"
DEFAULT_ZONE_NAME = "Primary Node A1"


class ZoneRegistry:
    """
    Keeps one entry per zone id and tracks which zone is being sampled.
    Zone histories are derived from the global history, never stored twice.
    """

    def __init__(self, zones: Optional[Dict[str, str]] = None, current_zone: Optional[str] = None):
        if zones is None:
            zones = {DEFAULT_ZONE_ID: DEFAULT_ZONE_NAME}
        self._zones: Dict[str, str] = {}
        for zone_id, name in zones.items():
            self.register(zone_id, name)

        if not self._zones:
            raise ConfigurationError("At least one zone must be registered")

        self._current = next(iter(self._zones))
        if current_zone is not None:
            self.select(current_zone)

    def register(self, zone_id: str, name: str):
        if zone_id in self._zones:
            raise ConfigurationError(f"Zone {zone_id} already exists")
        self._zones[zone_id] = name

    def select(self, zone_id: str) -> ZoneContext:
        if zone_id not in self._zones:
            raise ConfigurationError(f"Zone {zone_id} not found")
        self._current = zone_id
        return self.current

    @property
    def current(self) -> ZoneContext:
        return ZoneContext(current_zone_id=self._current)

    def __contains__(self, zone_id: str) -> bool:
        return zone_id in self._zones

    def zones(self) -> List[Dict]:
        return [
            {"id": zone_id, "name": name, "current": zone_id == self._current}
            for zone_id, name in self._zones.items()
        ]

    def zone_data(self, zone_id: str, history: Iterable[AnalysisResult]) -> ZoneData:
        """
        Builds the zone view from a history snapshot, preserving its order.
        """
        if zone_id not in self._zones:
            raise ConfigurationError(f"Zone {zone_id} not found")
        return ZoneData(
            id=zone_id,
            name=self._zones[zone_id],
            history=tuple(r for r in history if r.zone_id == zone_id)
        )
