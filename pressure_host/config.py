from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "Pressure Host"
    debug: bool = False
    log_level: str = "WARNING"  # logs go to stderr; stdout carries frames

    # --- metrics ---
    cpu_sample_interval: float = 0.2  # seconds between the two CPU samples

    # --- protocol ---
    max_frame_bytes: int | None = None  # inbound limit; None = only the u32 header bound
    legacy_type_key: bool = False  # also emit "type_" for older extensions

    model_config = {"env_file": ".env", "env_prefix": "PRESSURE_HOST_"}


settings = Settings()
