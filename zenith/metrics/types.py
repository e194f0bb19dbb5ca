"""Metrics input/output models."""

from typing import Literal

from pydantic import BaseModel, Field

from zenith.config.settings import DEFAULT_PRODUCTIVE_TYPES, Settings
from zenith.schedule.types import ActivityType


class MetricsConfig(BaseModel):
    """Denominator and productive categories shared by every metric consumer.

    Attributes:
        available_hours_per_day: Waking hours per day (16 = 24 minus 8 hours of sleep)
        productive_types: Categories counted towards the productivity score
    """

    available_hours_per_day: float = 16.0
    productive_types: list[ActivityType] = Field(default_factory=lambda: list(DEFAULT_PRODUCTIVE_TYPES))

    @property
    def available_hours_per_week(self) -> float:
        return self.available_hours_per_day * 7

    @classmethod
    def from_settings(cls, settings: Settings) -> "MetricsConfig":
        return cls(
            available_hours_per_day=settings.available_hours_per_day,
            productive_types=settings.productive_types,
        )


Balance = Literal["overloaded", "busy", "balanced"]
ProductivityLevel = Literal["low", "moderate", "high"]


class ScheduleMetrics(BaseModel):
    """Derived weekly totals.

    Attributes:
        total_occupied: Occupied hours per week
        total_free: Available hours minus occupied hours, floored at zero
        productivity: Productive share of available hours, integer 0-100
        duration_by_type: Hours per activity category
        available_hours: Weekly denominator the other figures are based on
        occupancy_percent: Occupied share of available hours, rounded
        balance: Workload label derived from occupancy
        productivity_level: Label derived from productivity
    """

    total_occupied: float
    total_free: float
    productivity: int
    duration_by_type: dict[ActivityType, float]
    available_hours: float
    occupancy_percent: int
    balance: Balance
    productivity_level: ProductivityLevel
