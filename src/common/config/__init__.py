from .models import (
    MonitoringConfig,
    SamplingConfig,
    StorageConfig,
    RulesConfig,
    CaptureSettings,
    AnalyzerConfig,
    ZoneEntry,
    ServerConfig,
)
from .manager import ConfigManager
