"""Tests for core domain models."""

import dataclasses

import pytest

from vitalwatch.core.errors import ConfigurationError
from vitalwatch.core.models import (
    Alert,
    BudgetStatus,
    BudgetThreshold,
    MetricRecord,
    RecordContext,
    Severity,
    Vital,
)


class TestVital:
    """Tests for the Vital enum."""

    @pytest.mark.core
    @pytest.mark.parametrize("name", ["LCP", "FID", "INP", "CLS", "FCP", "TTFB"])
    def test_parse_headline_names(self, name: str) -> None:
        """Headline vital names parse to enum members."""
        assert Vital.parse(name) is Vital(name)

    @pytest.mark.core
    @pytest.mark.parametrize("name", ["RESOURCE_IMAGE", "LONG_TASK", "lcp", ""])
    def test_parse_ad_hoc_names_returns_none(self, name: str) -> None:
        """Anything outside the closed set is an ad hoc signal."""
        assert Vital.parse(name) is None


class TestMetricRecord:
    """Tests for MetricRecord."""

    @pytest.mark.core
    def test_record_is_immutable(self) -> None:
        """MetricRecord cannot be mutated after creation."""
        record = MetricRecord(name="LCP", value=1800.0, timestamp=1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.value = 1.0  # type: ignore[misc]

    @pytest.mark.core
    def test_as_dict_flattens_context(self) -> None:
        """as_dict exposes page and user agent at the top level."""
        record = MetricRecord(
            name="TTFB",
            value=120.0,
            timestamp=5.0,
            context=RecordContext(page="/checkout", user_agent="agent"),
        )
        assert record.as_dict() == {
            "name": "TTFB",
            "value": 120.0,
            "timestamp": 5.0,
            "page": "/checkout",
            "user_agent": "agent",
        }


class TestBudgetThreshold:
    """Tests for BudgetThreshold classification and validation."""

    @pytest.mark.core
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, BudgetStatus.GOOD),
            (2500, BudgetStatus.GOOD),
            (2500.001, BudgetStatus.WARNING),
            (4000, BudgetStatus.WARNING),
            (4000.001, BudgetStatus.POOR),
        ],
    )
    def test_classification_boundaries(
        self, value: float, expected: BudgetStatus
    ) -> None:
        """Ceilings are inclusive for the tier below them."""
        threshold = BudgetThreshold("LCP", good_ceiling=2500, poor_ceiling=4000)
        assert threshold.classify(value) is expected

    @pytest.mark.core
    def test_rejects_inverted_ceilings(self) -> None:
        """good_ceiling above poor_ceiling fails fast."""
        with pytest.raises(ConfigurationError, match="exceeds"):
            BudgetThreshold("LCP", good_ceiling=4000, poor_ceiling=2500)

    @pytest.mark.core
    def test_rejects_empty_metric(self) -> None:
        """The metric name is required."""
        with pytest.raises(ConfigurationError, match="non-empty"):
            BudgetThreshold("", good_ceiling=1, poor_ceiling=2)

    @pytest.mark.core
    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), "100", None, True])
    def test_rejects_non_numeric_or_non_finite(self, bad: object) -> None:
        """Ceilings must be finite numbers."""
        with pytest.raises(ConfigurationError):
            BudgetThreshold("LCP", good_ceiling=bad, poor_ceiling=4000)  # type: ignore[arg-type]

    @pytest.mark.core
    def test_equal_ceilings_allowed(self) -> None:
        """A threshold with no warning band is valid."""
        threshold = BudgetThreshold("FID", good_ceiling=100, poor_ceiling=100)
        assert threshold.classify(100) is BudgetStatus.GOOD
        assert threshold.classify(101) is BudgetStatus.POOR

    @pytest.mark.core
    def test_configuration_error_is_value_error(self) -> None:
        """Callers catching ValueError also catch configuration errors."""
        with pytest.raises(ValueError):
            BudgetThreshold("LCP", good_ceiling=2, poor_ceiling=1)


class TestAlert:
    """Tests for Alert."""

    @pytest.mark.core
    def test_alerts_get_distinct_ids(self) -> None:
        """Each alert has its own identity."""
        a = Alert("LCP", Severity.ERROR, "m", raised_at=1.0)
        b = Alert("LCP", Severity.ERROR, "m", raised_at=1.0)
        assert a.id != b.id

    @pytest.mark.core
    def test_as_dict_serializes_severity(self) -> None:
        """Severity is rendered as its string value."""
        alert = Alert("CLS", Severity.ERROR, "msg", raised_at=2.0, id="abc")
        assert alert.as_dict() == {
            "id": "abc",
            "signal": "CLS",
            "severity": "error",
            "message": "msg",
            "raised_at": 2.0,
        }
