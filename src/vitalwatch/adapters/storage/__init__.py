"""Storage adapters implementing core ports."""

from vitalwatch.adapters.storage.ring_buffer import EvictionPolicy, RingBufferMetricStore

__all__ = ["EvictionPolicy", "RingBufferMetricStore"]
