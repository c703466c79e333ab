"""Capped, deduplicating queue of active alerts."""

import logging
from collections import deque

from vitalwatch.core.errors import ConfigurationError
from vitalwatch.core.models import Alert

logger = logging.getLogger(__name__)

DEFAULT_ALERT_CAPACITY = 20


class AlertSink:
    """Active alerts in arrival order.

    An alert is ignored while another alert with the same signal and
    severity is still active. When the sink is full the oldest alert is
    evicted.

    Args:
        capacity: Maximum number of active alerts.
    """

    def __init__(self, capacity: int = DEFAULT_ALERT_CAPACITY) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ConfigurationError(
                f"alert capacity must be a positive integer, got {capacity!r}"
            )
        self._capacity = capacity
        self._alerts: deque[Alert] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def raise_alert(self, alert: Alert) -> bool:
        """Add ``alert`` unless a duplicate is active.

        Returns:
            True if the alert was added.
        """
        key = (alert.signal, alert.severity)
        if any((a.signal, a.severity) == key for a in self._alerts):
            logger.debug("Duplicate alert suppressed: %s/%s", alert.signal, alert.severity)
            return False
        self._alerts.append(alert)
        return True

    def dismiss(self, identity: int | str) -> None:
        """Remove an alert by position or by id. Unknown identities are ignored."""
        # @tra: Alerts.Dismiss.IgnoresBooleans
        if isinstance(identity, bool):
            return
        if isinstance(identity, int):
            if 0 <= identity < len(self._alerts):
                del self._alerts[identity]
            return
        for alert in self._alerts:
            if alert.id == identity:
                self._alerts.remove(alert)
                return

    def list(self) -> tuple[Alert, ...]:
        return tuple(self._alerts)

    def __len__(self) -> int:
        return len(self._alerts)
