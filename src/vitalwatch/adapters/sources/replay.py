"""In-process instrumentation source that replays scripted entries.

ReplaySource stands in for a host runtime: the engine subscribes to it like
any other source, and callers push entry batches with ``emit`` or play a
whole recorded trace with ``replay``. Channels outside ``supported`` raise
UnsupportedChannelError on subscribe, which lets a test model a host that
lacks, say, layout-shift instrumentation.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import Any

from vitalwatch.core.entries import Channel
from vitalwatch.core.errors import UnsupportedChannelError
from vitalwatch.core.ports import EntryHandler, Unsubscribe


class ReplaySource:
    """Push-based implementation of InstrumentationSource.

    Args:
        supported: Channels this source can serve. Defaults to all channels.
    """

    def __init__(self, supported: Iterable[Channel | str] | None = None) -> None:
        self._supported = frozenset(
            Channel(c) for c in (Channel if supported is None else supported)
        )
        self._handlers: dict[Channel, list[EntryHandler]] = defaultdict(list)

    @property
    def supported(self) -> frozenset[Channel]:
        return self._supported

    def subscribe(self, channel: Channel, handler: EntryHandler) -> Unsubscribe:
        channel = Channel(channel)
        if channel not in self._supported:
            raise UnsupportedChannelError(channel)
        self._handlers[channel].append(handler)

        def unsubscribe() -> None:
            handlers = self._handlers[channel]
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def subscriber_count(self, channel: Channel | str) -> int:
        return len(self._handlers.get(Channel(channel), []))

    def emit(self, channel: Channel | str, *entries: Any) -> None:
        """Deliver ``entries`` as one batch to every handler on ``channel``.

        Entries may be entry dataclasses or mappings with host field names.
        Emitting on a channel nobody listens to drops the batch.
        """
        channel = Channel(channel)
        for handler in list(self._handlers.get(channel, [])):
            handler(list(entries))

    def replay(self, script: Iterable[Mapping[str, Any]]) -> int:
        """Deliver a recorded trace.

        Each step is ``{"channel": <name>, "entries": [<entry>, ...]}``.

        Returns:
            Number of batches delivered.
        """
        delivered = 0
        for step in script:
            self.emit(step["channel"], *step.get("entries", ()))
            delivered += 1
        return delivered
