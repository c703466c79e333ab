"""Read-side rollup over the store, snapshot and budget table."""

from collections import Counter
from collections.abc import Iterable

from vitalwatch.core.budgets import BudgetEvaluator
from vitalwatch.core.collectors import LONG_TASK_THRESHOLD_MS, SLOW_RESOURCE_THRESHOLD_MS
from vitalwatch.core.models import (
    BudgetStatus,
    BudgetStatusRow,
    MetricRecord,
    PerformanceSummary,
)
from vitalwatch.core.resources import RESOURCE_PREFIX


def _count_status(count: int, warning_above: int, poor_above: int) -> BudgetStatus:
    if count > poor_above:
        return BudgetStatus.POOR
    if count > warning_above:
        return BudgetStatus.WARNING
    return BudgetStatus.GOOD


def summarize(
    records: Iterable[MetricRecord],
    vitals: dict[str, float],
    evaluator: BudgetEvaluator,
) -> PerformanceSummary:
    """Build a summary without side effects.

    Budget rows go through ``evaluator.classify`` only, so computing a
    summary never raises alerts.

    Args:
        records: Retained metric records.
        vitals: Current headline vital values keyed by name.
        evaluator: Source of the budget table.

    Returns:
        PerformanceSummary for the given inputs.
    """
    long_tasks = 0
    slow_resources = 0
    resource_counts: Counter[str] = Counter()
    for record in records:
        if record.name == "LONG_TASK":
            if record.value > LONG_TASK_THRESHOLD_MS:
                long_tasks += 1
        elif record.name.startswith(RESOURCE_PREFIX):
            resource_counts[record.name.removeprefix(RESOURCE_PREFIX)] += 1
            if record.value > SLOW_RESOURCE_THRESHOLD_MS:
                slow_resources += 1

    rows = tuple(
        BudgetStatusRow(
            metric=t.metric,
            good_ceiling=t.good_ceiling,
            poor_ceiling=t.poor_ceiling,
            current=vitals.get(t.metric),
            status=evaluator.classify(t.metric, vitals.get(t.metric)),
        )
        for t in evaluator.thresholds
    )

    return PerformanceSummary(
        vitals=dict(vitals),
        budget_status=rows,
        long_tasks=long_tasks,
        slow_resources=slow_resources,
        resource_counts=dict(sorted(resource_counts.items())),
        long_task_status=_count_status(long_tasks, warning_above=2, poor_above=5),
        slow_resource_status=_count_status(slow_resources, warning_above=1, poor_above=3),
    )
