"""Collector adapters that turn raw entries into metric values.

One collector per instrumentation channel. A collector derives values from
the entries it is handed and forwards them to a ``CollectorSink`` (the
engine), which records, snapshots and budget-checks them. Collectors hold
only the per-channel state their derivation rule needs.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar, Protocol

from vitalwatch.core.entries import (
    ENTRY_TYPES,
    Channel,
    EventTimingEntry,
    FirstInputEntry,
    LargestContentfulPaintEntry,
    LayoutShiftEntry,
    LongTaskEntry,
    NavigationEntry,
    PaintEntry,
    ResourceEntry,
)
from vitalwatch.core.resources import classify_resource, resource_metric, size_metric

logger = logging.getLogger(__name__)

LONG_TASK_THRESHOLD_MS = 50.0
SLOW_RESOURCE_THRESHOLD_MS = 1000.0

CLS_SESSION_GAP_MS = 1000.0
CLS_SESSION_SPAN_MS = 5000.0


class CollectorSink(Protocol):
    """What a collector forwards derived values to."""

    def emit(self, name: str, value: float) -> None: ...

    def report_issue(self, kind: str, value: float, details: str | None = None) -> None: ...


class Collector:
    """Base class for channel collectors."""

    channel: ClassVar[Channel]

    def __init__(self, sink: CollectorSink) -> None:
        self._sink = sink

    def handle(self, entries: Sequence[Any]) -> None:
        """Process one delivered batch of entries.

        Malformed mapping entries are logged and skipped; the rest of the
        batch is still collected.
        """
        # @tra: Collectors.MalformedEntry.Skipped
        coerced = []
        for entry in entries:
            try:
                coerced.append(self._coerce(entry))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed %s entry: %s", self.channel, exc)
        self.collect(coerced)

    def collect(self, entries: list[Any]) -> None:
        raise NotImplementedError

    def _coerce(self, entry: Any) -> Any:
        if isinstance(entry, Mapping):
            return ENTRY_TYPES[self.channel].from_mapping(entry)
        return entry


class PaintCollector(Collector):
    """First Contentful Paint."""

    channel = Channel.PAINT

    def collect(self, entries: list[PaintEntry]) -> None:
        for entry in entries:
            if entry.name == "first-contentful-paint":
                self._sink.emit("FCP", entry.start_time)


class LargestContentfulPaintCollector(Collector):
    """Largest Contentful Paint; each batch's last candidate wins."""

    channel = Channel.LARGEST_CONTENTFUL_PAINT

    def collect(self, entries: list[LargestContentfulPaintEntry]) -> None:
        if entries:
            self._sink.emit("LCP", entries[-1].start_time)


class FirstInputCollector(Collector):
    """First Input Delay, reported once."""

    channel = Channel.FIRST_INPUT

    def __init__(self, sink: CollectorSink) -> None:
        super().__init__(sink)
        self._fired = False

    def collect(self, entries: list[FirstInputEntry]) -> None:
        if self._fired or not entries:
            return
        self._fired = True
        entry = entries[0]
        self._sink.emit("FID", entry.processing_start - entry.start_time)


class InteractionCollector(Collector):
    """Interaction to Next Paint, one value per interaction."""

    channel = Channel.EVENT

    def collect(self, entries: list[EventTimingEntry]) -> None:
        for entry in entries:
            if entry.interaction_id:
                self._sink.emit("INP", entry.processing_end - entry.start_time)


class LayoutShiftCollector(Collector):
    """Cumulative Layout Shift using session windows.

    Shifts less than 1s apart, within 5s of the session's first shift, sum
    into one session. CLS is the largest session sum seen so far.
    """

    channel = Channel.LAYOUT_SHIFT

    def __init__(self, sink: CollectorSink) -> None:
        super().__init__(sink)
        self._cls = 0.0
        self._session_value = 0.0
        self._session_first: float | None = None
        self._session_last: float | None = None

    def collect(self, entries: list[LayoutShiftEntry]) -> None:
        # @tra: Collectors.LayoutShift.SessionWindow
        for entry in entries:
            if entry.had_recent_input:
                continue
            if (
                self._session_first is not None
                and self._session_last is not None
                and entry.start_time - self._session_last < CLS_SESSION_GAP_MS
                and entry.start_time - self._session_first < CLS_SESSION_SPAN_MS
            ):
                self._session_value += entry.value
            else:
                self._session_value = entry.value
                self._session_first = entry.start_time
            self._session_last = entry.start_time

            if self._session_value > self._cls:
                self._cls = self._session_value
                self._sink.emit("CLS", self._cls)


class NavigationCollector(Collector):
    """Time to First Byte plus document timing milestones."""

    channel = Channel.NAVIGATION

    def collect(self, entries: list[NavigationEntry]) -> None:
        for entry in entries:
            self._sink.emit("TTFB", entry.response_start - entry.request_start)
            self._sink.emit(
                "DOM_CONTENT_LOADED",
                entry.dom_content_loaded_event_end - entry.navigation_start,
            )
            self._sink.emit("LOAD_COMPLETE", entry.load_event_end - entry.navigation_start)
            self._sink.emit(
                "DNS_LOOKUP", entry.domain_lookup_end - entry.domain_lookup_start
            )
            self._sink.emit("TCP_CONNECT", entry.connect_end - entry.connect_start)


class LongTaskCollector(Collector):
    channel = Channel.LONG_TASK

    def collect(self, entries: list[LongTaskEntry]) -> None:
        for entry in entries:
            self._sink.emit("LONG_TASK", entry.duration)
            if entry.duration > LONG_TASK_THRESHOLD_MS:
                self._sink.report_issue("LONG_TASK", entry.duration)


class ResourceCollector(Collector):
    """Resource load durations and transfer sizes, bucketed by initiator."""

    channel = Channel.RESOURCE

    def collect(self, entries: list[ResourceEntry]) -> None:
        for entry in entries:
            bucket = classify_resource(entry.name, entry.initiator_type)
            duration = entry.response_end - entry.start_time
            self._sink.emit(resource_metric(bucket), duration)
            if duration > SLOW_RESOURCE_THRESHOLD_MS:
                self._sink.report_issue("SLOW_RESOURCE", duration, entry.name)
            if entry.transfer_size:
                self._sink.emit(size_metric(bucket), float(entry.transfer_size))


DEFAULT_COLLECTORS: tuple[type[Collector], ...] = (
    LargestContentfulPaintCollector,
    FirstInputCollector,
    InteractionCollector,
    LayoutShiftCollector,
    PaintCollector,
    NavigationCollector,
    LongTaskCollector,
    ResourceCollector,
)
