"""Shared test fixtures for all test modules."""

from collections.abc import Callable, Generator

import pytest

from vitalwatch.adapters.sources.replay import ReplaySource
from vitalwatch.core.config import EngineConfig
from vitalwatch.core.engine import PerformanceEngine
from vitalwatch.core.models import MetricRecord

try:
    import httpx
except ImportError:
    httpx = None


class FakeClock:
    """Deterministic clock advanced by hand."""

    def __init__(self, now: float = 1702300000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fixed clock starting at a known timestamp."""
    return FakeClock()


@pytest.fixture
def replay_source() -> ReplaySource:
    """Provide a source supporting every channel."""
    return ReplaySource()


@pytest.fixture
def engine(
    replay_source: ReplaySource, clock: FakeClock
) -> Generator[PerformanceEngine]:
    """Provide a started engine wired to ``replay_source``."""
    config = EngineConfig(page="/home", user_agent="test-agent")
    engine = PerformanceEngine(replay_source, config, clock=clock)
    engine.start()
    yield engine
    engine.disconnect()


@pytest.fixture
def make_record() -> Callable[..., MetricRecord]:
    """Factory fixture for MetricRecord objects with a running timestamp."""
    counter = {"ts": 1000.0}

    def _make(name: str = "LCP", value: float = 1.0) -> MetricRecord:
        counter["ts"] += 1
        return MetricRecord(name=name, value=value, timestamp=counter["ts"])

    return _make


# === ASGI Test Fixtures ===


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            app = create_asgi_app(engine)
            async with asgi_test_client(app) as client:
                response = await client.get("/vitals")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
