from __future__ import annotations

import logging

import psutil

from pressure_host.collectors.base import MetricsProvider
from pressure_host.models import MetricsSnapshot

logger = logging.getLogger(__name__)


class PsutilMetricsProvider(MetricsProvider):
    """Reads system memory and CPU utilization through psutil.

    CPU usage is the delta between two samples taken ``sample_interval``
    seconds apart, so every ``snapshot()`` call blocks for at least that
    long. Used memory is ``total - available`` so reclaimable cache does
    not count as pressure.
    """

    name = "psutil_metrics"

    def __init__(self, sample_interval: float = 0.2) -> None:
        self.sample_interval = sample_interval

    def snapshot(self) -> MetricsSnapshot:
        try:
            vm = psutil.virtual_memory()
            cpu_percent = psutil.cpu_percent(interval=self.sample_interval)
        except (OSError, RuntimeError, psutil.Error):
            logger.debug("System metrics unavailable", exc_info=True)
            return MetricsSnapshot.unavailable()

        used = max(vm.total - vm.available, 0)
        return MetricsSnapshot.from_bytes(vm.total, used, float(cpu_percent))
