"""Port interfaces for the engine's collaborators.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from vitalwatch.core.entries import Channel
from vitalwatch.core.models import MetricRecord, PerformanceIssue

EntryHandler = Callable[[Sequence[Any]], None]
Unsubscribe = Callable[[], None]
IssueReporter = Callable[[PerformanceIssue], None]


@runtime_checkable
class InstrumentationSource(Protocol):
    """Port for a push-based source of instrumentation entries.

    Adapters implementing this protocol deliver batches of entries for a
    channel to every subscribed handler. Examples: ReplaySource.
    """

    def subscribe(self, channel: Channel, handler: EntryHandler) -> Unsubscribe:
        """Register ``handler`` for entry batches on ``channel``.

        Returns:
            Zero-argument callable that removes the subscription.

        Raises:
            UnsupportedChannelError: If the host cannot serve ``channel``.
        """
        ...


@runtime_checkable
class MetricStorePort(Protocol):
    """Port for bounded metric record storage.

    Examples: RingBufferMetricStore.
    """

    @property
    def capacity(self) -> int:
        """Maximum number of retained records."""
        ...

    def append(self, record: MetricRecord) -> None:
        """Store a record, evicting as needed to stay within capacity."""
        ...

    def query_by_name(self, name: str) -> Sequence[MetricRecord]:
        """Return retained records named ``name``, oldest first."""
        ...

    def recent(self, n: int) -> Sequence[MetricRecord]:
        """Return the last ``n`` records, most recent last."""
        ...

    def records(self) -> Sequence[MetricRecord]:
        """Return every retained record, oldest first."""
        ...

    def __len__(self) -> int: ...
