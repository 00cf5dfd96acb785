from __future__ import annotations

import logging
from enum import StrEnum

from pressure_host.collectors import (
    BatteryProvider,
    MetricsProvider,
    PsutilBatteryProvider,
    PsutilMetricsProvider,
)
from pressure_host.engine.pressure_engine import assess
from pressure_host.models import (
    ErrorResponse,
    Response,
    StateResponse,
    decode_request,
    encode_response,
)
from pressure_host.protocol import MessageChannel, RequestDecodeError

logger = logging.getLogger(__name__)


class DispatcherState(StrEnum):
    AWAITING_REQUEST = "awaiting_request"
    CLOSED = "closed"


class RequestDispatcher:
    """Serves framed requests from a channel until the peer closes the stream.

    Every frame gets exactly one response frame; undecodable requests are
    answered with an error response and the loop keeps going. Transport
    faults propagate to the caller.
    """

    def __init__(
        self,
        channel: MessageChannel,
        metrics_provider: MetricsProvider | None = None,
        battery_provider: BatteryProvider | None = None,
        legacy_type_key: bool = False,
    ) -> None:
        self.channel = channel
        self.metrics_provider = metrics_provider or PsutilMetricsProvider()
        self.battery_provider = battery_provider or PsutilBatteryProvider()
        self.legacy_type_key = legacy_type_key
        self._state = DispatcherState.AWAITING_REQUEST
        self._handled = 0

    # ── loop ────────────────────────────────────────────

    def serve_forever(self) -> int:
        """Run until end of stream. Returns the number of requests handled."""
        while self._state is DispatcherState.AWAITING_REQUEST:
            payload = self.channel.read_frame()
            if payload is None:
                self._state = DispatcherState.CLOSED
                logger.info("Input stream closed after %d request(s)", self._handled)
                break
            self.respond(self.handle(payload))
            self._handled += 1
        return self._handled

    def respond(self, response: Response) -> None:
        self.channel.write_message(encode_response(response, self.legacy_type_key))

    # ── request handling ────────────────────────────────

    def handle(self, payload: bytes) -> Response:
        try:
            decode_request(payload)
        except RequestDecodeError as exc:
            logger.warning("Rejected request: %s", exc)
            return ErrorResponse(message=str(exc))

        # get_state is the only request type decode_request accepts
        return self._get_state()

    def _get_state(self) -> StateResponse:
        metrics = self.metrics_provider.snapshot()
        battery = self.battery_provider.battery()
        reading = assess(metrics, battery)
        logger.debug(
            "State: score=%d level=%s reasons=%s",
            reading.score,
            reading.level,
            ",".join(reading.reasons),
        )
        return StateResponse.build(metrics, battery, reading)

    # ── introspection ───────────────────────────────────

    @property
    def state(self) -> DispatcherState:
        return self._state

    @property
    def handled(self) -> int:
        return self._handled
