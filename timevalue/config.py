"""Engine-wide tunables, overridable through ``TIMEVALUE_*`` environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TIMEVALUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Day-count basis for elapsed-time fractions (actual days / basis).
    day_count_basis: int = Field(default=365, gt=0)

    # XIRR root finding
    xirr_initial_guess: float = Field(default=0.1, gt=-1)
    xirr_tolerance: float = Field(default=1e-6, gt=0)
    xirr_max_iterations: int = Field(default=100, ge=1)
    xirr_derivative_floor: float = Field(default=1e-10, gt=0)
    xirr_bracket_low: float = Field(default=-0.99, gt=-1)
    xirr_bracket_high: float = 10.0
    xirr_bisection_max_iterations: int = Field(default=200, ge=1)

    # PPF-style accounts: deposits on or before this day earn for the month.
    ppf_deposit_cutoff_day: int = Field(default=5, ge=1, le=28)

    # Valuation layer defaults
    default_interest_rate: float = 7.1
    xirr_min_holding_days: int = Field(default=30, ge=0)
    xirr_display_cap: float = Field(default=999.99, gt=0)

    log_level: str = "INFO"
    log_json: bool = False

    @model_validator(mode="after")
    def ensure_bracket(self) -> "EngineSettings":
        if self.xirr_bracket_high <= self.xirr_bracket_low:
            raise ValueError("xirr_bracket_high must be greater than xirr_bracket_low")
        return self


@lru_cache(maxsize=1)
def load_settings() -> EngineSettings:
    return EngineSettings()
