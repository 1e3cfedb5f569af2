import asyncio

from src.common.exceptions import CaptureUnavailable
from src.monitoring.domain.entities import AnalysisResult, DensityLevel, TrafficFlow


def make_payload(risk_score=50, people_count=5, vehicle_count=3, **overrides):
    """Decoded analyzer response, in the analyzer's camelCase wire format."""
    payload = {
        "peopleCount": people_count,
        "vehicleCount": vehicle_count,
        "density": "Medium",
        "flow": "Moderate",
        "riskScore": risk_score,
        "summary": "Steady pedestrian traffic near the crossing",
        "prediction": "Likely to increase in 10 mins",
    }
    payload.update(overrides)
    return payload


def make_result(risk_score=50, people_count=5, timestamp=0.0, zone_id="Primary Node A1", **overrides):
    fields = dict(
        people_count=people_count,
        vehicle_count=3,
        density=DensityLevel.MEDIUM,
        flow=TrafficFlow.MODERATE,
        risk_score=risk_score,
        summary="Crowd gathering at the north entrance",
        prediction="Likely to increase in 10 mins",
        timestamp=timestamp,
        zone_id=zone_id,
    )
    fields.update(overrides)
    return AnalysisResult(**fields)


class FakeClock:
    def __init__(self, start=1000.0, step=0.0):
        self.now = start
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


class FakeCapture:
    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = 0
        self.released = False

    async def capture_frame(self) -> bytes:
        self.calls += 1
        if self.calls in self.fail_on:
            raise CaptureUnavailable("Camera access denied or unavailable")
        return b"\xff\xd8fake-jpeg\xff\xd9"

    def release(self):
        self.released = True


class ScriptedAnalyzer:
    """
    Returns queued responses in order, then `default`.
    Exceptions in the script are raised instead of returned.
    """

    def __init__(self, responses=None, default=None, delay=0.0):
        self.responses = list(responses or [])
        self.default = default if default is not None else make_payload()
        self.delay = delay
        self.calls = 0
        self.instructions = []
        self.closed = False
        self.on_call = None

    async def analyze(self, image, instruction):
        self.calls += 1
        self.instructions.append(instruction)
        if self.on_call:
            self.on_call(self.calls)
        if self.delay:
            await asyncio.sleep(self.delay)
        item = self.responses.pop(0) if self.responses else self.default
        if isinstance(item, Exception):
            raise item
        return item

    async def aclose(self):
        self.closed = True


