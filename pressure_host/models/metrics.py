from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

BYTES_PER_MB = 1024 * 1024


class MetricsSnapshot(BaseModel):
    """Instantaneous memory and CPU reading of the local machine.

    ``total_mb == 0`` is the degenerate snapshot returned when the OS
    counters could not be read.
    """

    total_mb: int = Field(ge=0)
    used_mb: int = Field(ge=0)
    free_mb: int = Field(ge=0)
    cpu_percent: float = Field(ge=0.0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_free(self) -> MetricsSnapshot:
        expected = max(self.total_mb - self.used_mb, 0)
        if self.free_mb != expected:
            raise ValueError(
                f"free_mb must equal total_mb - used_mb (saturating): "
                f"expected {expected}, got {self.free_mb}"
            )
        return self

    @classmethod
    def from_bytes(cls, total: int, used: int, cpu_percent: float) -> MetricsSnapshot:
        total_mb = max(total, 0) // BYTES_PER_MB
        used_mb = max(used, 0) // BYTES_PER_MB
        return cls(
            total_mb=total_mb,
            used_mb=used_mb,
            free_mb=max(total_mb - used_mb, 0),
            cpu_percent=max(cpu_percent, 0.0),
        )

    @classmethod
    def unavailable(cls) -> MetricsSnapshot:
        return cls(total_mb=0, used_mb=0, free_mb=0, cpu_percent=0.0)


class BatteryState(BaseModel):
    """Battery reading. Providers return ``None`` instead of a partial state."""

    on_battery: bool
    percent: float = Field(ge=0.0, le=100.0)

    model_config = {"frozen": True}
