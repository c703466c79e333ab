"""vitalwatch - runtime performance telemetry and budget enforcement."""

import logging

from vitalwatch.adapters.sources.replay import ReplaySource
from vitalwatch.adapters.storage.ring_buffer import EvictionPolicy, RingBufferMetricStore
from vitalwatch.core.alerts import AlertSink
from vitalwatch.core.budgets import DEFAULT_BUDGETS, BudgetEvaluator
from vitalwatch.core.config import EngineConfig
from vitalwatch.core.engine import PerformanceEngine
from vitalwatch.core.entries import Channel
from vitalwatch.core.errors import (
    ConfigurationError,
    UnsupportedChannelError,
    VitalwatchError,
)
from vitalwatch.core.models import (
    Alert,
    BudgetStatus,
    BudgetThreshold,
    MetricRecord,
    PerformanceIssue,
    PerformanceSummary,
    Severity,
    Vital,
)
from vitalwatch.core.ports import InstrumentationSource, MetricStorePort

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_BUDGETS",
    "Alert",
    "AlertSink",
    "BudgetEvaluator",
    "BudgetStatus",
    "BudgetThreshold",
    "Channel",
    "ConfigurationError",
    "EngineConfig",
    "EvictionPolicy",
    "InstrumentationSource",
    "MetricRecord",
    "MetricStorePort",
    "PerformanceEngine",
    "PerformanceIssue",
    "PerformanceSummary",
    "ReplaySource",
    "RingBufferMetricStore",
    "Severity",
    "UnsupportedChannelError",
    "Vital",
    "VitalwatchError",
]
