from __future__ import annotations

import json
from typing import Literal, Union

from pydantic import BaseModel, Field, ValidationError

from pressure_host.models.metrics import BatteryState, MetricsSnapshot
from pressure_host.models.pressure import PressureLevel, PressureReading, ReasonCode
from pressure_host.protocol.errors import RequestDecodeError


# ── requests ────────────────────────────────────────────


class GetStateRequest(BaseModel):
    type: Literal["get_state"] = "get_state"


Request = GetStateRequest

REQUEST_MODELS: dict[str, type[BaseModel]] = {
    "get_state": GetStateRequest,
}


def decode_request(payload: bytes) -> Request:
    """Parse a frame payload into a request model.

    Raises ``RequestDecodeError`` for anything that is not a JSON object
    carrying a known ``type`` tag and a valid body.
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RequestDecodeError(f"invalid JSON payload: {exc}") from exc
    except RecursionError as exc:
        raise RequestDecodeError("request nesting too deep") from exc

    if not isinstance(data, dict):
        raise RequestDecodeError("request must be a JSON object")

    kind = data.get("type")
    model = REQUEST_MODELS.get(kind) if isinstance(kind, str) else None
    if model is None:
        raise RequestDecodeError(f"unknown request type: {kind!r}")

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise RequestDecodeError(
            f"malformed {kind} request: {exc.error_count()} validation error(s)"
        ) from exc


# ── responses ───────────────────────────────────────────


class StateResponse(BaseModel):
    type: Literal["state"] = "state"

    ram_total_mb: int
    ram_used_mb: int
    ram_free_mb: int
    cpu_usage_percent: float

    on_battery: bool | None = None
    battery_percent: float | None = None

    pressure_level: PressureLevel
    pressure_score: int
    pressure_reasons: list[ReasonCode] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        metrics: MetricsSnapshot,
        battery: BatteryState | None,
        reading: PressureReading,
    ) -> StateResponse:
        return cls(
            ram_total_mb=metrics.total_mb,
            ram_used_mb=metrics.used_mb,
            ram_free_mb=metrics.free_mb,
            cpu_usage_percent=metrics.cpu_percent,
            on_battery=battery.on_battery if battery else None,
            battery_percent=battery.percent if battery else None,
            pressure_level=reading.level,
            pressure_score=reading.score,
            pressure_reasons=list(reading.reasons),
        )


class ErrorResponse(BaseModel):
    type: Literal["error"] = "error"
    message: str


Response = Union[StateResponse, ErrorResponse]


def encode_response(response: Response, legacy_type_key: bool = False) -> dict:
    """Serialize a response to a JSON-ready dict.

    With ``legacy_type_key`` the tag is duplicated under ``type_`` for
    extensions that still read the old key.
    """
    data = response.model_dump(mode="json")
    if legacy_type_key:
        data["type_"] = data["type"]
    return data
