"""Engine configuration."""

import platform
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from vitalwatch.core.alerts import DEFAULT_ALERT_CAPACITY
from vitalwatch.core.errors import ConfigurationError
from vitalwatch.core.models import BudgetThreshold
from vitalwatch.core.ports import IssueReporter

DEFAULT_STORE_CAPACITY = 100


def _default_user_agent() -> str:
    return f"python/{platform.python_version()}"


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return value


@dataclass(frozen=True)
class EngineConfig:
    """Construction-time settings for PerformanceEngine.

    Attributes:
        store_capacity: Maximum number of retained metric records.
        alert_capacity: Maximum number of active alerts.
        budgets: Budget table; None selects the default budgets.
        page: Page or view identifier stamped on records.
        user_agent: User-agent string stamped on records.
        issue_reporter: Optional callable receiving PerformanceIssue objects.
    """

    store_capacity: int = DEFAULT_STORE_CAPACITY
    alert_capacity: int = DEFAULT_ALERT_CAPACITY
    budgets: tuple[BudgetThreshold, ...] | None = None
    page: str = ""
    user_agent: str = field(default_factory=_default_user_agent)
    issue_reporter: IssueReporter | None = None

    def __post_init__(self) -> None:
        _positive_int("store_capacity", self.store_capacity)
        _positive_int("alert_capacity", self.alert_capacity)
        if self.budgets is not None:
            object.__setattr__(self, "budgets", tuple(self.budgets))
            for budget in self.budgets:
                if not isinstance(budget, BudgetThreshold):
                    raise ConfigurationError(
                        f"budgets must contain BudgetThreshold, got {type(budget).__name__}"
                    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EngineConfig":
        """Build a config from a plain mapping.

        Accepts ``storeCapacity``, ``alertCapacity`` and ``budgetThresholds``
        (a list of ``{metric, goodCeiling, poorCeiling}``), or the snake_case
        spellings of the same keys. Missing keys take their defaults.

        Raises:
            ConfigurationError: If any value is malformed.
        """
        kwargs: dict[str, Any] = {}
        for key, alias in (
            ("store_capacity", "storeCapacity"),
            ("alert_capacity", "alertCapacity"),
            ("page", "page"),
            ("user_agent", "userAgent"),
        ):
            if key in data:
                kwargs[key] = data[key]
            elif alias in data:
                kwargs[key] = data[alias]

        raw_budgets = data.get("budget_thresholds", data.get("budgetThresholds"))
        if raw_budgets is not None:
            if isinstance(raw_budgets, str | bytes | Mapping):
                raise ConfigurationError("budgetThresholds must be a list")
            kwargs["budgets"] = tuple(_parse_threshold(item) for item in raw_budgets)
        return cls(**kwargs)


def _parse_threshold(item: Any) -> BudgetThreshold:
    if isinstance(item, BudgetThreshold):
        return item
    if not isinstance(item, Mapping):
        raise ConfigurationError(f"budget threshold must be a mapping, got {item!r}")
    try:
        return BudgetThreshold(
            metric=item["metric"],
            good_ceiling=item.get("good_ceiling", item.get("goodCeiling")),
            poor_ceiling=item.get("poor_ceiling", item.get("poorCeiling")),
        )
    except KeyError as e:
        raise ConfigurationError(f"budget threshold missing {e.args[0]!r}") from e
