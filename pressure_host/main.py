from __future__ import annotations

import logging
import sys
from typing import BinaryIO

from pressure_host.collectors import PsutilBatteryProvider, PsutilMetricsProvider
from pressure_host.config import Settings, settings
from pressure_host.engine import RequestDispatcher
from pressure_host.protocol import MessageChannel

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: Settings) -> None:
    """Send all logging to stderr; stdout is reserved for protocol frames."""
    level = logging.DEBUG if config.debug else logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)


def run(
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
    config: Settings | None = None,
) -> int:
    """Serve requests until stdin closes. Returns the process exit status."""
    config = config or settings
    channel = MessageChannel(
        stdin or sys.stdin.buffer,
        stdout or sys.stdout.buffer,
        max_frame_bytes=config.max_frame_bytes,
    )
    dispatcher = RequestDispatcher(
        channel,
        metrics_provider=PsutilMetricsProvider(sample_interval=config.cpu_sample_interval),
        battery_provider=PsutilBatteryProvider(),
        legacy_type_key=config.legacy_type_key,
    )

    logger.info("%s started", config.app_name)
    try:
        handled = dispatcher.serve_forever()
    except OSError:
        logger.exception("Transport fault, shutting down")
        return 1
    logger.info("%s stopped after %d request(s)", config.app_name, handled)
    return 0


def main() -> None:
    configure_logging(settings)
    sys.exit(run())
