"""The performance telemetry engine.

PerformanceEngine wires collectors to an instrumentation source and routes
every derived value to the vital snapshot, the metric store and the budget
evaluator. It owns all mutable state; readers get copies.

Example:
    ```python
    from vitalwatch import PerformanceEngine, ReplaySource

    source = ReplaySource()
    with PerformanceEngine(source) as engine:
        source.emit("largest-contentful-paint", {"startTime": 1800})
        engine.vitals()  # {"LCP": 1800}
    ```
"""

import logging
import threading
import time
from collections.abc import Callable, Generator, Iterable, Sequence
from contextlib import contextmanager
from typing import Any, Self, TypeVar

from vitalwatch.adapters.storage.ring_buffer import RingBufferMetricStore
from vitalwatch.core.alerts import AlertSink
from vitalwatch.core.budgets import BudgetEvaluator
from vitalwatch.core.collectors import DEFAULT_COLLECTORS, Collector
from vitalwatch.core.config import EngineConfig
from vitalwatch.core.errors import UnsupportedChannelError
from vitalwatch.core.models import (
    Alert,
    BudgetStatus,
    BudgetThreshold,
    MetricRecord,
    PerformanceIssue,
    PerformanceSummary,
    RecordContext,
    Vital,
)
from vitalwatch.core.ports import InstrumentationSource, MetricStorePort, Unsubscribe
from vitalwatch.core.summary import summarize
from vitalwatch.core.vitals import VitalSnapshot

logger = logging.getLogger(__name__)

EXPORT_RECENT_LIMIT = 100

T = TypeVar("T")


class PerformanceEngine:
    """Collects, stores and budget-checks runtime performance signals.

    Args:
        source: Instrumentation source the collectors subscribe to.
        config: Engine settings; defaults apply when omitted.
        store: Metric store; a ring buffer sized by ``config`` by default.
        clock: Returns the current Unix time in seconds.
        collectors: Collector classes to run, one per channel.
    """

    def __init__(
        self,
        source: InstrumentationSource,
        config: EngineConfig | None = None,
        *,
        store: MetricStorePort | None = None,
        clock: Callable[[], float] = time.time,
        collectors: Iterable[type[Collector]] = DEFAULT_COLLECTORS,
    ) -> None:
        self._config = config or EngineConfig()
        self._source = source
        self._clock = clock
        self._lock = threading.RLock()
        self._context = RecordContext(
            page=self._config.page, user_agent=self._config.user_agent
        )
        # @tra: Core.Engine.InjectedStore
        self._store: MetricStorePort = (
            store
            if store is not None
            else RingBufferMetricStore(self._config.store_capacity)
        )
        self._vitals = VitalSnapshot()
        self._alerts = AlertSink(self._config.alert_capacity)
        self._evaluator = BudgetEvaluator(
            self._config.budgets, alert_sink=self._alerts, clock=clock
        )
        self._collectors = [cls(self) for cls in collectors]
        self._subscriptions: list[Unsubscribe] = []
        self._started = False
        self._closed = False

    # === Lifecycle ===

    def start(self) -> Self:
        """Subscribe every collector to its channel. Repeat calls are no-ops."""
        with self._lock:
            if self._started or self._closed:
                return self
            self._started = True
            for collector in self._collectors:
                self._subscribe(collector)
        return self

    def _subscribe(self, collector: Collector) -> None:
        def handler(entries: Sequence[Any]) -> None:
            self._dispatch(collector, entries)

        try:
            unsubscribe = self._source.subscribe(collector.channel, handler)
        except UnsupportedChannelError:
            logger.warning("%s observer not supported", collector.channel)
            return
        except Exception:
            logger.warning(
                "%s observer could not subscribe", collector.channel, exc_info=True
            )
            return
        self._subscriptions.append(unsubscribe)

    def disconnect(self) -> None:
        """Unsubscribe all collectors. Data stays queryable; idempotent."""
        with self._lock:
            self._closed = True
            subscriptions, self._subscriptions = self._subscriptions, []
        for unsubscribe in subscriptions:
            try:
                unsubscribe()
            except Exception:
                logger.warning("Failed to unsubscribe collector", exc_info=True)

    @property
    def connected(self) -> bool:
        return self._started and not self._closed

    def __enter__(self) -> Self:
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()

    # === Ingestion ===

    def _dispatch(self, collector: Collector, entries: Sequence[Any]) -> None:
        with self._lock:
            if self._closed:
                return
            collector.handle(entries)

    def emit(self, name: str, value: float) -> None:
        """Record a derived value and route it to snapshot and budgets.

        Non-numeric values are logged and dropped before any state changes.
        """
        # @tra: Core.Engine.RejectsNonNumeric
        if isinstance(value, bool) or not isinstance(value, int | float):
            logger.warning("Ignoring non-numeric value for %s: %r", name, value)
            return
        with self._lock:
            if self._closed:
                return
            record = MetricRecord(
                name=name,
                value=value,
                timestamp=self._clock(),
                context=self._context,
            )
            vital = Vital.parse(name)
            if vital is not None:
                self._vitals.observe(vital, value)
            self._store.append(record)
            if self._evaluator.check(name, value) is BudgetStatus.POOR:
                self.report_issue("BUDGET_EXCEEDED", value, name)

    record = emit

    def report_issue(self, kind: str, value: float, details: str | None = None) -> None:
        """Log a performance issue and hand it to the configured reporter."""
        if kind == "LONG_TASK":
            logger.warning("Long task detected: %sms", value)
        elif kind == "SLOW_RESOURCE":
            logger.warning("Slow resource: %s (%sms)", details, value)
        reporter = self._config.issue_reporter
        if reporter is None:
            return
        issue = PerformanceIssue(
            kind=kind,
            value=value,
            details=details,
            raised_at=self._clock(),
            context=self._context,
            vitals=self._vitals.as_dict(),
        )
        try:
            reporter(issue)
        except Exception:
            logger.exception("Issue reporter failed for %s", kind)

    def set_page(self, page: str) -> None:
        """Change the page identifier stamped on subsequent records."""
        with self._lock:
            self._context = RecordContext(page=page, user_agent=self._context.user_agent)

    @contextmanager
    def measure_interaction(self, name: str) -> Generator[None]:
        """Record the duration of the block as ``INTERACTION_<NAME>`` in ms."""
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.emit(f"INTERACTION_{name.upper()}", elapsed_ms)

    def measure_render(self, component: str, render: Callable[[], T]) -> T:
        """Call ``render`` and record its duration as ``COMPONENT_RENDER_<NAME>``."""
        start = time.perf_counter()
        result = render()
        elapsed_ms = (time.perf_counter() - start) * 1000
        self.emit(f"COMPONENT_RENDER_{component.upper()}", elapsed_ms)
        return result

    # === Budgets ===

    def classify(self, name: str, value: float | None = None) -> BudgetStatus:
        """Classify ``value``, or the current value of vital ``name``."""
        if value is None:
            vital = Vital.parse(name)
            value = self._vitals.get(vital) if vital is not None else None
        return self._evaluator.classify(name, value)

    def replace_budgets(self, thresholds: Iterable[BudgetThreshold]) -> None:
        with self._lock:
            self._evaluator.replace_thresholds(thresholds)

    @property
    def budgets(self) -> tuple[BudgetThreshold, ...]:
        return self._evaluator.thresholds

    # === Queries ===

    def vitals(self) -> dict[str, float]:
        with self._lock:
            return self._vitals.as_dict()

    def metrics(self) -> tuple[MetricRecord, ...]:
        with self._lock:
            return tuple(self._store.records())

    def metrics_by_name(self, name: str) -> tuple[MetricRecord, ...]:
        with self._lock:
            return tuple(self._store.query_by_name(name))

    def recent_metrics(self, n: int) -> tuple[MetricRecord, ...]:
        with self._lock:
            return tuple(self._store.recent(n))

    def alerts(self) -> tuple[Alert, ...]:
        with self._lock:
            return self._alerts.list()

    def dismiss_alert(self, identity: int | str) -> None:
        with self._lock:
            self._alerts.dismiss(identity)

    def summary(self) -> PerformanceSummary:
        with self._lock:
            return summarize(
                self._store.records(), self._vitals.as_dict(), self._evaluator
            )

    def export_snapshot(self) -> dict[str, Any]:
        """Plain structure for export collaborators."""
        with self._lock:
            return {
                "timestamp": self._clock(),
                "vitals": self._vitals.as_dict(),
                "recent_metrics": [
                    r.as_dict() for r in self._store.recent(EXPORT_RECENT_LIMIT)
                ],
                "summary": self.summary().as_dict(),
            }
