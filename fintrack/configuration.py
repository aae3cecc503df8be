"""Mini README: Centralised configuration models and helpers for the finance tracker.

Structure:
    * FinanceTrackerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``FINTRACK_``), choose where receipts are stored, which operator profile
    the dashboard runs as, and which host/port the service binds to. The
    configuration is cached so validation happens once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FinanceTrackerSettings(BaseSettings):
    """Runtime configuration for the finance tracker."""

    model_config = SettingsConfigDict(
        env_prefix="FINTRACK_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding uploaded receipts and other artefacts.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web service exposes.",
        ge=1,
        le=65535,
    )
    organisation_name: str = Field(
        "Finance Tracker of CS of ICBT",
        description="Heading rendered on the dashboard.",
    )
    currency_label: str = Field(
        "LKR",
        description="Currency prefix used when rendering monetary amounts.",
    )
    receipt_max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Largest receipt upload accepted, in bytes.",
        gt=0,
    )
    public_base_url: str = Field(
        "http://127.0.0.1:8000",
        description="Base URL used to build shareable receipt links.",
    )
    operator_id: str = Field("treasurer-1", description="Identifier of the signed-in operator.")
    operator_email: str = Field(
        "treasurer@example.org", description="Email shown in the dashboard header."
    )
    operator_role: str = Field(
        "treasurer",
        description="Role of the operator; only treasurers may record or export data.",
    )
    calculator_session_limit: int = Field(
        1000,
        description="Most calculator sessions kept in memory before the idle ones are dropped.",
        ge=1,
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("operator_role")
    @classmethod
    def _normalise_role(cls, value: str) -> str:
        role = value.strip().lower()
        if role not in {"treasurer", "member"}:
            raise ValueError(f"Unsupported operator role: {value}")
        return role

    @property
    def receipts_directory(self) -> Path:
        """Folder acting as the receipts bucket."""

        return self.data_directory / "receipts"

    @property
    def seeds_demo_data(self) -> bool:
        """Development runs start with sample transactions and budgets."""

        return self.environment.strip().lower() == "development"


@lru_cache()
def get_settings() -> FinanceTrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FinanceTrackerSettings()
