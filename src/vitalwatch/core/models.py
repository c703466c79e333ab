"""Core domain models for performance telemetry."""

import math
import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from vitalwatch.core.errors import ConfigurationError


class Vital(StrEnum):
    """Headline signals tracked as a current value rather than a history."""

    LCP = "LCP"
    FID = "FID"
    INP = "INP"
    CLS = "CLS"
    FCP = "FCP"
    TTFB = "TTFB"

    @classmethod
    def parse(cls, name: str) -> "Vital | None":
        """Return the vital named ``name``, or None for ad hoc signals."""
        try:
            return cls(name)
        except ValueError:
            return None


class BudgetStatus(StrEnum):
    """Classification of a value against its budget."""

    GOOD = "good"
    WARNING = "warning"
    POOR = "poor"
    UNKNOWN = "unknown"


class Severity(StrEnum):
    """Alert severity."""

    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class RecordContext:
    """Where a sample was captured.

    Attributes:
        page: Identifier of the originating page or view.
        user_agent: User-agent string of the host at capture time.
    """

    page: str = ""
    user_agent: str = ""


@dataclass(frozen=True)
class MetricRecord:
    """A single observed sample.

    Attributes:
        name: Signal identifier (e.g. LCP, RESOURCE_SCRIPT, LONG_TASK).
        value: Magnitude in the signal's native unit.
        timestamp: Unix timestamp in seconds.
        context: Page and user agent at capture time.
    """

    name: str
    value: float
    timestamp: float
    context: RecordContext = field(default_factory=RecordContext)

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "timestamp": self.timestamp,
            "page": self.context.page,
            "user_agent": self.context.user_agent,
        }


@dataclass(frozen=True)
class BudgetThreshold:
    """Three-tier budget for one signal.

    ``value <= good_ceiling`` is good, ``value <= poor_ceiling`` is warning,
    anything above ``poor_ceiling`` is poor.

    Attributes:
        metric: Signal name the budget applies to.
        good_ceiling: Largest value still classified as good.
        poor_ceiling: Largest value still classified as warning.
    """

    metric: str
    good_ceiling: float
    poor_ceiling: float

    def __post_init__(self) -> None:
        if not isinstance(self.metric, str) or not self.metric:
            raise ConfigurationError("budget metric must be a non-empty string")
        for label in ("good_ceiling", "poor_ceiling"):
            value = getattr(self, label)
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise ConfigurationError(f"{self.metric}: {label} must be a number")
            if not math.isfinite(value):
                raise ConfigurationError(f"{self.metric}: {label} must be finite")
        if self.good_ceiling > self.poor_ceiling:
            raise ConfigurationError(
                f"{self.metric}: good_ceiling {self.good_ceiling} exceeds "
                f"poor_ceiling {self.poor_ceiling}"
            )

    def classify(self, value: float) -> BudgetStatus:
        # @tra: Budgets.Classify.Boundaries
        if value <= self.good_ceiling:
            return BudgetStatus.GOOD
        if value <= self.poor_ceiling:
            return BudgetStatus.WARNING
        return BudgetStatus.POOR


@dataclass(frozen=True)
class Alert:
    """An active, user-visible budget alert.

    Attributes:
        signal: Signal name that breached its budget.
        severity: Alert severity.
        message: Human-readable description.
        raised_at: Unix timestamp in seconds.
        id: Unique identity used for dismissal.
    """

    signal: str
    severity: Severity
    message: str
    raised_at: float
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "signal": self.signal,
            "severity": str(self.severity),
            "message": self.message,
            "raised_at": self.raised_at,
        }


@dataclass(frozen=True)
class PerformanceIssue:
    """A notable event handed to the issue-reporting collaborator.

    Attributes:
        kind: LONG_TASK, SLOW_RESOURCE or BUDGET_EXCEEDED.
        value: The offending value.
        details: Signal name or resource URL, when known.
        raised_at: Unix timestamp in seconds.
        context: Page and user agent at the time of the issue.
        vitals: Copy of the headline vitals at the time of the issue.
    """

    kind: str
    value: float
    details: str | None
    raised_at: float
    context: RecordContext = field(default_factory=RecordContext)
    vitals: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class BudgetStatusRow:
    """One row of the budget status table."""

    metric: str
    good_ceiling: float
    poor_ceiling: float
    current: float | None
    status: BudgetStatus

    def as_dict(self) -> dict[str, Any]:
        return {
            "metric": self.metric,
            "good_ceiling": self.good_ceiling,
            "poor_ceiling": self.poor_ceiling,
            "current": self.current,
            "status": str(self.status),
        }


@dataclass(frozen=True)
class PerformanceSummary:
    """Rollup of the current telemetry state.

    Attributes:
        vitals: Current headline vital values keyed by name.
        budget_status: Status of each configured budget.
        long_tasks: Number of retained long tasks over 50ms.
        slow_resources: Number of retained resource loads over 1000ms.
        resource_counts: Retained resource loads per initiator bucket.
        long_task_status: Health tier derived from ``long_tasks``.
        slow_resource_status: Health tier derived from ``slow_resources``.
    """

    vitals: dict[str, float]
    budget_status: tuple[BudgetStatusRow, ...]
    long_tasks: int
    slow_resources: int
    resource_counts: dict[str, int]
    long_task_status: BudgetStatus
    slow_resource_status: BudgetStatus

    def as_dict(self) -> dict[str, Any]:
        return {
            "vitals": dict(self.vitals),
            "budget_status": [row.as_dict() for row in self.budget_status],
            "long_tasks": self.long_tasks,
            "slow_resources": self.slow_resources,
            "resource_counts": dict(self.resource_counts),
            "long_task_status": str(self.long_task_status),
            "slow_resource_status": str(self.slow_resource_status),
        }
