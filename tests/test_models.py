"""Tests for pressure_host.models — snapshots, readings, request/response messages."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from pressure_host.models import (
    BatteryState,
    ErrorResponse,
    GetStateRequest,
    MetricsSnapshot,
    PressureLevel,
    PressureReading,
    ReasonCode,
    StateResponse,
    decode_request,
    encode_response,
)
from pressure_host.models.metrics import BYTES_PER_MB
from pressure_host.protocol import RequestDecodeError


# ── MetricsSnapshot ───────────────────────────────────

class TestMetricsSnapshot:
    def test_valid_snapshot(self):
        m = MetricsSnapshot(total_mb=16000, used_mb=8000, free_mb=8000, cpu_percent=12.5)
        assert m.free_mb == 8000

    def test_free_must_match_total_minus_used(self):
        with pytest.raises(ValidationError):
            MetricsSnapshot(total_mb=16000, used_mb=8000, free_mb=7000, cpu_percent=0.0)

    def test_free_saturates_at_zero(self):
        m = MetricsSnapshot(total_mb=100, used_mb=120, free_mb=0, cpu_percent=0.0)
        assert m.free_mb == 0

    def test_negative_values_rejected(self):
        with pytest.raises(ValidationError):
            MetricsSnapshot(total_mb=-1, used_mb=0, free_mb=0, cpu_percent=0.0)
        with pytest.raises(ValidationError):
            MetricsSnapshot(total_mb=10, used_mb=0, free_mb=10, cpu_percent=-5.0)

    def test_frozen(self):
        m = MetricsSnapshot.unavailable()
        with pytest.raises(ValidationError):
            m.total_mb = 5

    def test_unavailable_is_zeroed(self):
        m = MetricsSnapshot.unavailable()
        assert (m.total_mb, m.used_mb, m.free_mb, m.cpu_percent) == (0, 0, 0, 0.0)

    def test_from_bytes_converts_to_mb(self):
        m = MetricsSnapshot.from_bytes(16 * 1024 * BYTES_PER_MB, 4 * 1024 * BYTES_PER_MB, 33.0)
        assert m.total_mb == 16384
        assert m.used_mb == 4096
        assert m.free_mb == 12288
        assert m.cpu_percent == 33.0

    def test_from_bytes_truncates_partial_megabytes(self):
        m = MetricsSnapshot.from_bytes(10 * BYTES_PER_MB + 500, 3 * BYTES_PER_MB + 999, 0.0)
        assert m.total_mb == 10
        assert m.used_mb == 3
        assert m.free_mb == 7


# ── BatteryState ──────────────────────────────────────

class TestBatteryState:
    def test_construction(self):
        b = BatteryState(on_battery=True, percent=55.5)
        assert b.on_battery is True
        assert b.percent == 55.5

    @pytest.mark.parametrize("percent", [-0.1, 100.1])
    def test_percent_bounds(self, percent):
        with pytest.raises(ValidationError):
            BatteryState(on_battery=False, percent=percent)

    def test_both_fields_required(self):
        with pytest.raises(ValidationError):
            BatteryState(on_battery=True)


# ── PressureReading ───────────────────────────────────

class TestPressureReading:
    def test_defaults(self):
        r = PressureReading(score=10, level=PressureLevel.LOW)
        assert r.reasons == []

    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_bounds(self, score):
        with pytest.raises(ValidationError):
            PressureReading(score=score, level=PressureLevel.LOW)

    def test_level_ordering(self):
        assert list(PressureLevel) == [PressureLevel.LOW, PressureLevel.MEDIUM, PressureLevel.HIGH]

    def test_reason_values_match_names(self):
        for member in ReasonCode:
            assert member.value == member.name


# ── requests ──────────────────────────────────────────

class TestDecodeRequest:
    def test_get_state(self):
        req = decode_request(b'{"type": "get_state"}')
        assert isinstance(req, GetStateRequest)

    def test_extra_fields_ignored(self):
        req = decode_request(b'{"type": "get_state", "id": 7}')
        assert isinstance(req, GetStateRequest)

    @pytest.mark.parametrize(
        "payload, fragment",
        [
            (b"not json", "invalid JSON"),
            (b"\x80abc", "invalid JSON"),
            (b"", "invalid JSON"),
            (b"[1, 2]", "JSON object"),
            (b'"get_state"', "JSON object"),
            (b"{}", "unknown request type"),
            (b'{"type": "reboot"}', "unknown request type"),
            (b'{"type": 5}', "unknown request type"),
        ],
    )
    def test_rejected_payloads(self, payload, fragment):
        with pytest.raises(RequestDecodeError) as exc_info:
            decode_request(payload)
        assert fragment in str(exc_info.value)

    def test_deeply_nested_json_rejected(self):
        with pytest.raises(RequestDecodeError) as exc_info:
            decode_request(b"[" * 200_000)
        assert "nesting too deep" in str(exc_info.value)

    def test_decode_error_is_value_error(self):
        assert issubclass(RequestDecodeError, ValueError)


# ── responses ─────────────────────────────────────────

def _state_response(battery: BatteryState | None) -> StateResponse:
    metrics = MetricsSnapshot(total_mb=16000, used_mb=15500, free_mb=500, cpu_percent=95.0)
    reading = PressureReading(
        score=100,
        level=PressureLevel.HIGH,
        reasons=[ReasonCode.RAM_ELEVATED, ReasonCode.ON_BATTERY],
    )
    return StateResponse.build(metrics, battery, reading)


class TestEncodeResponse:
    def test_state_fields(self):
        data = encode_response(_state_response(BatteryState(on_battery=True, percent=80.0)))
        assert data == {
            "type": "state",
            "ram_total_mb": 16000,
            "ram_used_mb": 15500,
            "ram_free_mb": 500,
            "cpu_usage_percent": 95.0,
            "on_battery": True,
            "battery_percent": 80.0,
            "pressure_level": "HIGH",
            "pressure_score": 100,
            "pressure_reasons": ["RAM_ELEVATED", "ON_BATTERY"],
        }

    def test_missing_battery_is_null(self):
        data = encode_response(_state_response(None))
        assert data["on_battery"] is None
        assert data["battery_percent"] is None
        # stays JSON-serializable
        assert '"on_battery":null' in json.dumps(data, separators=(",", ":"))

    def test_error_response(self):
        data = encode_response(ErrorResponse(message="unknown request type: 'x'"))
        assert data == {"type": "error", "message": "unknown request type: 'x'"}

    def test_legacy_type_key(self):
        data = encode_response(_state_response(None), legacy_type_key=True)
        assert data["type"] == "state"
        assert data["type_"] == "state"

    def test_no_legacy_key_by_default(self):
        assert "type_" not in encode_response(ErrorResponse(message="x"))
