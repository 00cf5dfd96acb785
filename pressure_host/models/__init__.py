from .metrics import BatteryState, MetricsSnapshot
from .pressure import PressureLevel, PressureReading, ReasonCode
from .messages import (
    ErrorResponse,
    GetStateRequest,
    Request,
    Response,
    StateResponse,
    decode_request,
    encode_response,
)

__all__ = [
    "BatteryState",
    "MetricsSnapshot",
    "PressureLevel",
    "PressureReading",
    "ReasonCode",
    "ErrorResponse",
    "GetStateRequest",
    "Request",
    "Response",
    "StateResponse",
    "decode_request",
    "encode_response",
]
