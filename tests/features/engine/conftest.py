"""BDD step definitions for engine telemetry features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from vitalwatch.adapters.sources.replay import ReplaySource
from vitalwatch.core.engine import PerformanceEngine
from vitalwatch.core.entries import Channel


@dataclass
class EngineScenarioContext:
    """State shared between the steps of one scenario."""

    source: ReplaySource = field(default_factory=ReplaySource)
    engine: PerformanceEngine | None = None

    @property
    def started(self) -> PerformanceEngine:
        assert self.engine is not None, "engine was not started"
        return self.engine


@pytest.fixture
def ctx() -> EngineScenarioContext:
    """Fresh scenario context for each test."""
    return EngineScenarioContext()


# === Given ===
@given("an instrumentation source supporting every channel")
def step_full_source(ctx: EngineScenarioContext) -> None:
    ctx.source = ReplaySource()


@given(parsers.parse('an instrumentation source without "{channel}"'))
def step_partial_source(ctx: EngineScenarioContext, channel: str) -> None:
    if ctx.engine is not None:
        ctx.engine.disconnect()
    ctx.source = ReplaySource(supported=set(Channel) - {Channel(channel)})


@given("a started engine with default budgets")
def step_started_engine(ctx: EngineScenarioContext) -> None:
    ctx.engine = PerformanceEngine(ctx.source).start()


@given("the engine has been disconnected")
def step_disconnected(ctx: EngineScenarioContext) -> None:
    ctx.started.disconnect()


# === When ===
@when(parsers.parse("a largest-contentful-paint candidate arrives at {ms:d}ms"))
def step_lcp(ctx: EngineScenarioContext, ms: int) -> None:
    ctx.source.emit(Channel.LARGEST_CONTENTFUL_PAINT, {"startTime": ms})


@when(parsers.parse('a resource "{url}" loads in {ms:d}ms'))
def step_resource(ctx: EngineScenarioContext, url: str, ms: int) -> None:
    ctx.source.emit(Channel.RESOURCE, {"name": url, "startTime": 0, "responseEnd": ms})


@when(
    parsers.parse(
        "layout shifts of {a:g} at {ta:d}ms, {b:g} at {tb:d}ms and {c:g} at {tc:d}ms arrive"
    )
)
def step_layout_shifts(
    ctx: EngineScenarioContext, a: float, ta: int, b: float, tb: int, c: float, tc: int
) -> None:
    ctx.source.emit(
        Channel.LAYOUT_SHIFT,
        {"startTime": ta, "value": a},
        {"startTime": tb, "value": b},
        {"startTime": tc, "value": c},
    )


@when(parsers.parse("a layout shift of {value:g} arrives"))
def step_layout_shift(ctx: EngineScenarioContext, value: float) -> None:
    ctx.source.emit(Channel.LAYOUT_SHIFT, {"startTime": 0, "value": value})


# === Then ===
@then(parsers.parse('the current "{name}" vital is {value:g}'))
def step_vital_is(ctx: EngineScenarioContext, name: str, value: float) -> None:
    assert ctx.started.vitals()[name] == pytest.approx(value)


@then(parsers.parse('no "{name}" vital is reported'))
def step_no_vital(ctx: EngineScenarioContext, name: str) -> None:
    assert name not in ctx.started.vitals()


@then(parsers.parse('the "{name}" status is "{status}"'))
def step_status(ctx: EngineScenarioContext, name: str, status: str) -> None:
    assert ctx.started.classify(name) == status


@then(parsers.parse("there is {count:d} active alert"))
def step_alert_count(ctx: EngineScenarioContext, count: int) -> None:
    assert len(ctx.started.alerts()) == count


@then(parsers.parse('the alert message is "{message}"'))
def step_alert_message(ctx: EngineScenarioContext, message: str) -> None:
    assert ctx.started.alerts()[0].message == message


@then(parsers.parse("the summary reports {count:d} slow resource"))
def step_slow_resources(ctx: EngineScenarioContext, count: int) -> None:
    assert ctx.started.summary().slow_resources == count


@then(parsers.parse('the summary counts {count:d} "{bucket}" resource'))
def step_resource_count(ctx: EngineScenarioContext, count: int, bucket: str) -> None:
    assert ctx.started.summary().resource_counts[bucket] == count
