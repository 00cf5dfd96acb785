from __future__ import annotations

import math

from pressure_host.models import (
    BatteryState,
    MetricsSnapshot,
    PressureLevel,
    PressureReading,
    ReasonCode,
)

RAM_MAX_POINTS = 70
CPU_MAX_POINTS = 20
BATTERY_POINTS = 10

# (start, end) of each linear ramp: 0 points at start, max points at end
RAM_USED_RAMP = (0.70, 0.95)
RAM_FREE_RAMP = (0.20, 0.05)
CPU_RAMP = (40.0, 95.0)

HIGH_THRESHOLD = 75
MEDIUM_THRESHOLD = 50


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, ties away from zero."""
    return math.floor(value + 0.5)


def _ramp(value: float, start: float, end: float, points: int) -> int:
    fraction = (value - start) / (end - start)
    fraction = min(max(fraction, 0.0), 1.0)
    return round_half_up(fraction * points)


def ram_score(used_ratio: float, free_ratio: float) -> int:
    """Worse of the used-based and free-based ramps, 0-70."""
    used_points = _ramp(used_ratio, *RAM_USED_RAMP, RAM_MAX_POINTS)
    free_points = _ramp(free_ratio, *RAM_FREE_RAMP, RAM_MAX_POINTS)
    return max(used_points, free_points)


def cpu_score(cpu_percent: float) -> int:
    return _ramp(cpu_percent, *CPU_RAMP, CPU_MAX_POINTS)


def battery_score(on_battery: bool | None) -> int:
    # Unknown battery state is not a pressure contributor.
    return BATTERY_POINTS if on_battery is True else 0


def pressure_level(score: int) -> PressureLevel:
    if score >= HIGH_THRESHOLD:
        return PressureLevel.HIGH
    if score >= MEDIUM_THRESHOLD:
        return PressureLevel.MEDIUM
    return PressureLevel.LOW


def reason_codes(
    used_ratio: float,
    free_ratio: float,
    cpu_percent: float,
    on_battery: bool | None,
) -> list[ReasonCode]:
    """Flags checked against raw ratios, in fixed order. Severity tiers stack."""
    reasons: list[ReasonCode] = []
    if free_ratio < 0.12 or used_ratio > 0.85:
        reasons.append(ReasonCode.RAM_ELEVATED)
    if free_ratio < 0.07 or used_ratio > 0.93:
        reasons.append(ReasonCode.RAM_HIGH)
    if cpu_percent > 75.0:
        reasons.append(ReasonCode.CPU_ELEVATED)
    if cpu_percent > 90.0:
        reasons.append(ReasonCode.CPU_HIGH)
    if on_battery is True:
        reasons.append(ReasonCode.ON_BATTERY)
    return reasons


def compute_pressure(
    total_mb: int,
    used_mb: int,
    free_mb: int,
    cpu_percent: float,
    on_battery: bool | None = None,
) -> PressureReading:
    """Map raw memory/CPU/battery figures to a 0-100 pressure reading.

    Sub-scores are rounded half-up before they are summed. A zero
    ``total_mb`` means metrics were unavailable and yields a LOW reading
    with no reasons.
    """
    if total_mb == 0:
        return PressureReading(score=0, level=PressureLevel.LOW, reasons=[])

    used_ratio = used_mb / total_mb
    free_ratio = free_mb / total_mb

    total = ram_score(used_ratio, free_ratio) + cpu_score(cpu_percent) + battery_score(on_battery)
    score = min(max(total, 0), 100)

    return PressureReading(
        score=score,
        level=pressure_level(score),
        reasons=reason_codes(used_ratio, free_ratio, cpu_percent, on_battery),
    )


def assess(metrics: MetricsSnapshot, battery: BatteryState | None) -> PressureReading:
    return compute_pressure(
        metrics.total_mb,
        metrics.used_mb,
        metrics.free_mb,
        metrics.cpu_percent,
        battery.on_battery if battery else None,
    )
