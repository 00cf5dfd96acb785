from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class PressureLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ReasonCode(StrEnum):
    RAM_ELEVATED = "RAM_ELEVATED"
    RAM_HIGH = "RAM_HIGH"
    CPU_ELEVATED = "CPU_ELEVATED"
    CPU_HIGH = "CPU_HIGH"
    ON_BATTERY = "ON_BATTERY"


class PressureReading(BaseModel):
    """Derived pressure signal for one snapshot."""

    score: int = Field(ge=0, le=100)
    level: PressureLevel
    reasons: list[ReasonCode] = Field(default_factory=list)

    model_config = {"frozen": True}
