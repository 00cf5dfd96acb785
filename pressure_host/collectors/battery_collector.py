from __future__ import annotations

import logging

import psutil

from pressure_host.collectors.base import BatteryProvider
from pressure_host.models import BatteryState

logger = logging.getLogger(__name__)


class PsutilBatteryProvider(BatteryProvider):
    """Reads the first battery via ``psutil.sensors_battery()``.

    Returns ``None`` when the platform has no battery sensor support, no
    battery is present, or the query fails. An undeterminable plug state
    is reported as not on battery.
    """

    name = "psutil_battery"

    def battery(self) -> BatteryState | None:
        sensors_battery = getattr(psutil, "sensors_battery", None)
        if sensors_battery is None:
            return None

        try:
            info = sensors_battery()
        except (OSError, RuntimeError, psutil.Error):
            logger.debug("Battery state unavailable", exc_info=True)
            return None
        if info is None:
            return None

        percent = min(max(float(info.percent), 0.0), 100.0)
        return BatteryState(on_battery=info.power_plugged is False, percent=percent)
