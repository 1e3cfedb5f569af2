class MonitoringError(Exception):
    """Base exception for all monitoring module errors."""
    pass

class CaptureUnavailable(MonitoringError):
    """Raised when the frame source cannot deliver a frame."""
    pass

class AnalysisServiceError(MonitoringError):
    """Raised when the external analyzer fails, times out or returns a malformed response."""
    pass

class InvalidResult(MonitoringError):
    """Raised when an analysis result parses but violates a value invariant."""
    pass

class ConfigurationError(MonitoringError):
    """Raised when configuration is invalid."""
    pass
