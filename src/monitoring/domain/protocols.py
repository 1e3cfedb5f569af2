"""
Domain protocols for the zone monitoring module.
"""
from typing import Any, Protocol
from .entities import FailureReport

class FrameCapture(Protocol):
    """
    Protocol for grabbing a single encoded frame from the camera.
    Raises CaptureUnavailable when no frame can be produced.
    """
    async def capture_frame(self) -> bytes:
        ...

    def release(self):
        ...

class VisionAnalyzer(Protocol):
    """
    Protocol for the external vision-analysis service.
    Returns the decoded response; validation happens in the core.
    Raises AnalysisServiceError when the service fails.
    """
    async def analyze(self, image: bytes, instruction: str) -> Any:
        ...

    async def aclose(self):
        ...

class FailureReporter(Protocol):
    """
    Protocol for the observability sink receiving failed-cycle reports.
    """
    def report(self, failure: FailureReport):
        ...
