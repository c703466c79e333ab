"""Current-value table for the headline vitals."""

from vitalwatch.core.models import Vital

# Vitals whose snapshot value is the worst seen rather than the latest.
_KEEP_MAX = frozenset({Vital.INP})


class VitalSnapshot:
    """Latest observed value per headline vital.

    Holds at most one value per vital; a missing vital has not been observed
    yet. Values are overwritten in place and never historized.
    """

    def __init__(self) -> None:
        self._values: dict[Vital, float] = {}

    def observe(self, vital: Vital, value: float) -> None:
        if vital in _KEEP_MAX and vital in self._values:
            value = max(self._values[vital], value)
        self._values[vital] = value

    def get(self, vital: Vital) -> float | None:
        return self._values.get(vital)

    def as_dict(self) -> dict[str, float]:
        """Return a copy keyed by vital name, in declaration order."""
        return {str(v): self._values[v] for v in Vital if v in self._values}

    def __contains__(self, vital: object) -> bool:
        return vital in self._values

    def __len__(self) -> int:
        return len(self._values)
