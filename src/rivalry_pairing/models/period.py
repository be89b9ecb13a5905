"""Rivalry period schedule model."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, model_validator

RivalryMetric = Literal["distance", "moving_time", "elevation_gain", "suffer_score"]


class RivalryPeriod(BaseModel):
    """A scheduled rivalry period and the metric its matchups are decided on."""

    period_number: int = Field(ge=1)
    start_date: date
    end_date: date
    metric: RivalryMetric = "distance"
    metric_label: str = ""
    metric_unit: str = ""

    @model_validator(mode="after")
    def validate_date_range(self) -> RivalryPeriod:
        if self.end_date < self.start_date:
            msg = "end_date must not be before start_date"
            raise ValueError(msg)
        return self

    def contains(self, day: date) -> bool:
        """Whether ``day`` falls inside this period, both ends inclusive."""
        return self.start_date <= day <= self.end_date
