import itertools
import pytest
from tests.helpers import FakeClock, FakeCapture, ScriptedAnalyzer


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"alert-{next(counter)}"


@pytest.fixture
def capture():
    return FakeCapture()


@pytest.fixture
def analyzer():
    return ScriptedAnalyzer()
