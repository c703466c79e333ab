"""Ring buffer storage adapter for metric records.

Provides bounded in-memory storage with a fixed capacity. Useful for
long-running hosts that need predictable memory usage.
"""

from collections import deque
from enum import StrEnum

from vitalwatch.core.config import DEFAULT_STORE_CAPACITY
from vitalwatch.core.errors import ConfigurationError
from vitalwatch.core.models import MetricRecord


class EvictionPolicy(StrEnum):
    """What to drop when the buffer is full."""

    OLDEST = "oldest"
    NEWEST = "newest"


class RingBufferMetricStore:
    """Ring buffer implementation of MetricStorePort.

    Stores metric records in a fixed-size circular buffer. With the default
    OLDEST policy the oldest record is evicted to make room for each new one;
    with NEWEST, records arriving while the buffer is full are discarded.

    Args:
        capacity: Maximum number of records to retain.
        eviction: Eviction policy applied when the buffer is full.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_STORE_CAPACITY,
        eviction: EvictionPolicy = EvictionPolicy.OLDEST,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ConfigurationError(
                f"store capacity must be a positive integer, got {capacity!r}"
            )
        self._capacity = capacity
        self._eviction = EvictionPolicy(eviction)
        self._buffer: deque[MetricRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def eviction(self) -> EvictionPolicy:
        return self._eviction

    def append(self, record: MetricRecord) -> None:
        """Append a record at the tail."""
        if self._eviction is EvictionPolicy.NEWEST and len(self._buffer) >= self._capacity:
            return
        self._buffer.append(record)

    def query_by_name(self, name: str) -> tuple[MetricRecord, ...]:
        """Return retained records named ``name``, oldest first."""
        return tuple(r for r in self._buffer if r.name == name)

    def recent(self, n: int) -> tuple[MetricRecord, ...]:
        """Return the last ``n`` records, most recent last."""
        if n <= 0:
            return ()
        return tuple(self._buffer)[-n:]

    def records(self) -> tuple[MetricRecord, ...]:
        """Return every retained record, oldest first."""
        return tuple(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)
