import pytest
from src.common.config import ConfigManager
from src.common.exceptions import ConfigurationError
from src.monitoring.application.builder import MonitoringApplicationBuilder
from src.monitoring.domain.entities import EngineState
from src.monitoring.infrastructure.analyzers import GeminiAnalyzer
from src.monitoring.infrastructure.capture import OpenCVFrameCapture

def test_builder_constructs_complete_engine():
    """Test that the builder wires every component into the engine."""
    cfg = ConfigManager.from_container({
        'analyzer': {'api_key': 'test-key'},
        'sampling': {'interval_seconds': 2.0},
        'storage': {'history_capacity': 5, 'alert_capacity': 3},
        'zones': [
            {'id': 'north', 'name': 'North Gate'},
            {'id': 'south', 'name': 'South Gate'}
        ],
        'current_zone': 'south'
    })

    builder = MonitoringApplicationBuilder(cfg)
    engine = builder.build_broadcaster().build_engine()

    assert engine.state is EngineState.IDLE
    assert isinstance(builder.capture, OpenCVFrameCapture)
    assert isinstance(builder.analyzer, GeminiAnalyzer)
    assert engine.capture is builder.capture
    assert engine.analyzer is builder.analyzer
    assert engine.metrics_collector is builder.metrics_collector
    assert engine.scheduler.interval_seconds == 2.0
    assert engine.history.capacity == 5
    assert engine.alert_store.capacity == 3
    assert engine.zones.current.current_zone_id == 'south'
    assert engine.listener == builder.broadcaster.publish

    # Device is opened lazily on first capture
    assert builder.capture.cap is None

def test_builder_thresholds_from_config():
    cfg = ConfigManager.from_container({
        'analyzer': {'api_key': 'test-key'},
        'rules': {'warning_risk': 60, 'critical_risk': 80, 'overcrowding_people': 4}
    })

    engine = MonitoringApplicationBuilder(cfg).build_engine()

    thresholds = engine.rules.thresholds
    assert (thresholds.warning_risk, thresholds.critical_risk, thresholds.overcrowding_people) == (60, 80, 4)
    assert engine.listener is None

def test_builder_without_api_key_fails():
    cfg = ConfigManager.from_container({})

    with pytest.raises(ConfigurationError):
        MonitoringApplicationBuilder(cfg).build_analyzer()

def test_get_components():
    cfg = ConfigManager.from_container({'analyzer': {'api_key': 'test-key'}})
    builder = MonitoringApplicationBuilder(cfg)
    builder.build_engine()

    components = builder.get_components()

    assert components['zones'] is builder.zones
    assert components['broadcaster'] is None
    assert components['metrics_collector'] is builder.metrics_collector
