from dataclasses import dataclass, field
from typing import Optional, List

@dataclass
class SamplingConfig:
    interval_seconds: float = 5.0
    analysis_timeout_seconds: float = 20.0

@dataclass
class StorageConfig:
    history_capacity: int = 20
    alert_capacity: int = 10

@dataclass
class RulesConfig:
    warning_risk: int = 75
    critical_risk: int = 90
    overcrowding_people: int = 10

@dataclass
class CaptureSettings:
    source: str = "0"
    target_width: Optional[int] = 1280
    target_height: Optional[int] = 720
    jpeg_quality: int = 80
    buffer_size: int = 1

@dataclass
class AnalyzerConfig:
    model: str = "gemini-3-flash-preview"
    api_key: str = ""
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"

@dataclass
class ZoneEntry:
    id: str = "Primary Node A1"
    name: str = "Primary Node A1"

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000

@dataclass
class MonitoringConfig:
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    capture: CaptureSettings = field(default_factory=CaptureSettings)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    zones: List[ZoneEntry] = field(default_factory=lambda: [ZoneEntry()])
    current_zone: Optional[str] = None # First configured zone when unset
    server: ServerConfig = field(default_factory=ServerConfig)
