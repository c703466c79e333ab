"""Exception types raised by vitalwatch."""


class VitalwatchError(Exception):
    """Base class for all vitalwatch errors."""


class ConfigurationError(VitalwatchError, ValueError):
    """Raised at construction time when configuration is malformed."""


class UnsupportedChannelError(VitalwatchError):
    """Raised by an instrumentation source that cannot serve a channel.

    Attributes:
        channel: The channel that was requested.
    """

    def __init__(self, channel: object) -> None:
        super().__init__(f"instrumentation channel not supported: {channel}")
        self.channel = channel
