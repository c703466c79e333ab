"""Performance budgets and the evaluator that enforces them."""

import logging
import time
from collections.abc import Callable, Iterable

from vitalwatch.core.alerts import AlertSink
from vitalwatch.core.errors import ConfigurationError
from vitalwatch.core.models import Alert, BudgetStatus, BudgetThreshold, Severity

logger = logging.getLogger(__name__)

# Core Web Vitals tiers: good ceiling, then the poor cutoff.
DEFAULT_BUDGETS: tuple[BudgetThreshold, ...] = (
    BudgetThreshold("LCP", good_ceiling=2500, poor_ceiling=4000),
    BudgetThreshold("FID", good_ceiling=100, poor_ceiling=300),
    BudgetThreshold("INP", good_ceiling=200, poor_ceiling=500),
    BudgetThreshold("CLS", good_ceiling=0.1, poor_ceiling=0.25),
    BudgetThreshold("FCP", good_ceiling=1800, poor_ceiling=3000),
    BudgetThreshold("TTFB", good_ceiling=600, poor_ceiling=1000),
)


def _index(thresholds: Iterable[BudgetThreshold]) -> dict[str, BudgetThreshold]:
    table: dict[str, BudgetThreshold] = {}
    for threshold in thresholds:
        if not isinstance(threshold, BudgetThreshold):
            raise ConfigurationError(
                f"expected BudgetThreshold, got {type(threshold).__name__}"
            )
        if threshold.metric in table:
            raise ConfigurationError(f"duplicate budget for {threshold.metric}")
        table[threshold.metric] = threshold
    return table


class BudgetEvaluator:
    """Classifies values against a threshold table and raises alerts.

    Only poor values become alerts; warning-tier values are logged.
    The table can only be replaced as a whole.

    Args:
        thresholds: Budget table, defaults to DEFAULT_BUDGETS.
        alert_sink: Destination for breach alerts (optional).
        clock: Returns the current Unix time in seconds.
    """

    def __init__(
        self,
        thresholds: Iterable[BudgetThreshold] | None = None,
        alert_sink: AlertSink | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._table = _index(DEFAULT_BUDGETS if thresholds is None else thresholds)
        self._alert_sink = alert_sink
        self._clock = clock

    @property
    def thresholds(self) -> tuple[BudgetThreshold, ...]:
        return tuple(self._table.values())

    def threshold_for(self, name: str) -> BudgetThreshold | None:
        return self._table.get(name)

    def replace_thresholds(self, thresholds: Iterable[BudgetThreshold]) -> None:
        """Swap in a new table. A malformed table leaves the old one in place."""
        self._table = _index(thresholds)

    def classify(self, name: str, value: float | None) -> BudgetStatus:
        threshold = self._table.get(name)
        if threshold is None or value is None:
            return BudgetStatus.UNKNOWN
        return threshold.classify(value)

    def check(self, name: str, value: float | None) -> BudgetStatus:
        """Classify ``value`` and act on a breach.

        Returns:
            The classification of ``value``.
        """
        status = self.classify(name, value)
        if status is BudgetStatus.POOR:
            threshold = self._table[name]
            message = f"{name} exceeded budget: {value} > {threshold.poor_ceiling}"
            logger.error("Performance budget exceeded: %s", message)
            if self._alert_sink is not None:
                self._alert_sink.raise_alert(
                    Alert(
                        signal=name,
                        severity=Severity.ERROR,
                        message=message,
                        raised_at=self._clock(),
                    )
                )
        elif status is BudgetStatus.WARNING:
            logger.warning(
                "Performance warning for %s: %s > %s",
                name,
                value,
                self._table[name].good_ceiling,
            )
        return status
