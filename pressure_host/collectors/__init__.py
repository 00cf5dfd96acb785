from .base import BatteryProvider, MetricsProvider
from .battery_collector import PsutilBatteryProvider
from .metrics_collector import PsutilMetricsProvider

__all__ = [
    "BatteryProvider",
    "MetricsProvider",
    "PsutilBatteryProvider",
    "PsutilMetricsProvider",
]
