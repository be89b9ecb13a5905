"""Configuration schemas and loading for rivalry pairing."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from rivalry_pairing.core.errors import ValidationError
from rivalry_pairing.models.period import RivalryPeriod
from rivalry_pairing.services.pairing.engine import (
    DELTA,
    K0,
    KMAX,
    RECENT_AVOIDANCE_PERIODS,
    PairingParameters,
)

DEFAULT_SLUG_MAX_LENGTH = 50


def truncate_slug(value: str, max_length: int) -> str:
    """Cap label length so report tables stay readable."""
    if len(value) <= max_length:
        return value
    return value[:max_length]


class PairingConfig(BaseModel):
    """Pairing window and recency settings.

    Attributes:
        initial_window: Ranks below the anchor searched first.
        window_step: How many ranks an empty window grows by.
        max_window: Largest window before the full-pool fallback kicks in.
        recent_avoidance_periods: A rematch within this many periods counts
            as recent and is avoided when any alternative exists.
    """

    initial_window: int = Field(default=K0, ge=1)
    window_step: int = Field(default=DELTA, ge=1)
    max_window: int = Field(default=KMAX, ge=1)
    recent_avoidance_periods: int = Field(default=RECENT_AVOIDANCE_PERIODS, ge=0)

    @model_validator(mode="after")
    def validate_window_bounds(self) -> PairingConfig:
        if self.max_window < self.initial_window:
            msg = "max_window must be at least initial_window"
            raise ValueError(msg)
        return self

    def to_parameters(self) -> PairingParameters:
        """Build engine parameters from this config."""
        return PairingParameters(
            initial_window=self.initial_window,
            window_step=self.window_step,
            max_window=self.max_window,
            recent_avoidance_periods=self.recent_avoidance_periods,
        )


class RivalryConfig(BaseModel):
    """Complete rivalry configuration."""

    pairing: PairingConfig = Field(default_factory=PairingConfig)
    periods: list[RivalryPeriod] = Field(default_factory=list)
    output_dir: str = "./runs"
    slug_max_length: int = Field(default=DEFAULT_SLUG_MAX_LENGTH, ge=1, le=100)

    @field_validator("periods")
    @classmethod
    def validate_unique_period_numbers(cls, v: list[RivalryPeriod]) -> list[RivalryPeriod]:
        """Ensure each period number appears once in the schedule."""
        numbers = [p.period_number for p in v]
        if len(numbers) != len(set(numbers)):
            msg = "Period numbers must be unique"
            raise ValueError(msg)
        return sorted(v, key=lambda p: p.period_number)

    def get_period(self, period_number: int) -> RivalryPeriod | None:
        """Look up a scheduled period by number."""
        return next((p for p in self.periods if p.period_number == period_number), None)


def load_config(path: str | Path) -> RivalryConfig:
    """Load and validate configuration from YAML file.

    Args:
        path: Path to YAML configuration file.

    Returns:
        Validated RivalryConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If the file does not hold a mapping.
        pydantic.ValidationError: If config values are invalid.
    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError(str(config_path), "Top level of the config must be a mapping.")

    return RivalryConfig.model_validate(data)
