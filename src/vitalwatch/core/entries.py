"""Raw instrumentation entries as delivered by a host.

Each entry type mirrors one instrumentation channel. Times are milliseconds
relative to navigation start. ``from_mapping`` accepts the host's camelCase
field names (``startTime``, ``processingStart``...) as well as snake_case, so
recorded traces can be replayed as-is.
"""

import math
from collections.abc import Mapping
from dataclasses import MISSING, dataclass, fields
from enum import StrEnum
from typing import Any, Self


class Channel(StrEnum):
    """Instrumentation channels the engine can subscribe to."""

    PAINT = "paint"
    LARGEST_CONTENTFUL_PAINT = "largest-contentful-paint"
    FIRST_INPUT = "first-input"
    EVENT = "event"
    LAYOUT_SHIFT = "layout-shift"
    NAVIGATION = "navigation"
    LONG_TASK = "longtask"
    RESOURCE = "resource"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class _MappingEntry:
    """Mixin providing ``from_mapping`` for entry dataclasses."""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build an entry from host field names.

        Numeric strings are converted, so ``{"startTime": "1800"}`` yields
        ``start_time=1800.0``. Numbers pass through unchanged.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a numeric field cannot be converted.
        """
        # @tra: Entries.FromMapping.NumericConversion
        kwargs: dict[str, Any] = {}
        for f in fields(cls):  # type: ignore[arg-type]
            if f.name in data:
                raw = data[f.name]
            elif _camel(f.name) in data:
                raw = data[_camel(f.name)]
            elif f.default is MISSING:
                raise KeyError(f"{cls.__name__} requires '{_camel(f.name)}'")
            else:
                continue
            kwargs[f.name] = _convert(f.name, f.type, raw)
        return cls(**kwargs)


def _convert(name: str, kind: Any, raw: Any) -> Any:
    if kind is float or kind is int:
        if isinstance(raw, bool):
            raise ValueError(f"{name} must be a number, got {raw!r}")
        if isinstance(raw, int | float):
            value = raw
        else:
            try:
                value = float(raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be a number, got {raw!r}") from exc
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {raw!r}")
        return int(value) if kind is int else value
    if kind is bool:
        return bool(raw)
    if kind is str:
        return str(raw)
    return raw


@dataclass(frozen=True)
class PaintEntry(_MappingEntry):
    name: str
    start_time: float


@dataclass(frozen=True)
class LargestContentfulPaintEntry(_MappingEntry):
    start_time: float
    size: int = 0
    url: str = ""


@dataclass(frozen=True)
class FirstInputEntry(_MappingEntry):
    start_time: float
    processing_start: float
    name: str = ""


@dataclass(frozen=True)
class EventTimingEntry(_MappingEntry):
    start_time: float
    processing_start: float
    processing_end: float
    interaction_id: int = 0
    name: str = ""


@dataclass(frozen=True)
class LayoutShiftEntry(_MappingEntry):
    start_time: float
    value: float
    had_recent_input: bool = False


@dataclass(frozen=True)
class NavigationEntry(_MappingEntry):
    request_start: float
    response_start: float
    navigation_start: float = 0.0
    domain_lookup_start: float = 0.0
    domain_lookup_end: float = 0.0
    connect_start: float = 0.0
    connect_end: float = 0.0
    dom_content_loaded_event_end: float = 0.0
    load_event_end: float = 0.0


@dataclass(frozen=True)
class LongTaskEntry(_MappingEntry):
    start_time: float
    duration: float


@dataclass(frozen=True)
class ResourceEntry(_MappingEntry):
    name: str
    start_time: float
    response_end: float
    transfer_size: int = 0
    initiator_type: str = "other"


ENTRY_TYPES: dict[Channel, type[_MappingEntry]] = {
    Channel.PAINT: PaintEntry,
    Channel.LARGEST_CONTENTFUL_PAINT: LargestContentfulPaintEntry,
    Channel.FIRST_INPUT: FirstInputEntry,
    Channel.EVENT: EventTimingEntry,
    Channel.LAYOUT_SHIFT: LayoutShiftEntry,
    Channel.NAVIGATION: NavigationEntry,
    Channel.LONG_TASK: LongTaskEntry,
    Channel.RESOURCE: ResourceEntry,
}
