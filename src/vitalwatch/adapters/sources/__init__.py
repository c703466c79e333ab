"""Instrumentation source adapters."""

from vitalwatch.adapters.sources.replay import ReplaySource

__all__ = ["ReplaySource"]
