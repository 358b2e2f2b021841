"""Mini README: Centralised configuration for the Angkringan POS.

Structure:
    * AngkringanSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``ANGKRINGAN_*`` environment variables (or
    a local ``.env`` file). The settings object is cached so validation runs
    once per process; tests build ``AngkringanSettings`` directly instead.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class AngkringanSettings(BaseSettings):
    """Runtime configuration for the stall's till."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the menu, transaction and expense files.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the cashier service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the cashier service exposes.",
        ge=1,
        le=65535,
    )
    sync_url: Optional[str] = Field(
        None,
        description=(
            "URL of the spreadsheet web app used for cloud backup."
            " Leave unset to keep all data on this device."
        ),
    )
    sync_timeout_seconds: float = Field(
        10.0,
        description="Timeout applied to every request sent to the sync backend.",
        gt=0,
    )
    report_window_days: int = Field(
        7,
        description="Number of calendar days shown in the daily revenue chart.",
        ge=1,
        le=366,
    )

    class Config:
        env_prefix = "ANGKRINGAN_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @validator("sync_url", pre=True)
    def _blank_url_means_disabled(cls, value: Optional[str]) -> Optional[str]:
        """Treat an empty URL as "sync disabled" and strip pasted whitespace."""

        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None


@lru_cache()
def get_settings() -> AngkringanSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return AngkringanSettings()
