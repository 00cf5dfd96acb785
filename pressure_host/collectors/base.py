from __future__ import annotations

from abc import ABC, abstractmethod

from pressure_host.models import BatteryState, MetricsSnapshot


class MetricsProvider(ABC):
    """Source of memory/CPU snapshots.

    Implementations never raise for an unavailable OS query; they return
    ``MetricsSnapshot.unavailable()`` instead.
    """

    name: str = "metrics"

    @abstractmethod
    def snapshot(self) -> MetricsSnapshot:
        """Take one fresh reading."""
        ...


class BatteryProvider(ABC):
    """Source of battery state. ``None`` means no battery or no data."""

    name: str = "battery"

    @abstractmethod
    def battery(self) -> BatteryState | None:
        """Take one fresh reading, or None when there is no battery data."""
        ...
