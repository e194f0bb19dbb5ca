"""Metrics module - pure functions over the schedule state.

Occupied and free time, per-category durations and a bounded productivity
score. Unparseable block times contribute zero hours, never NaN.
"""

from zenith.metrics.calculator import (
    compute_metrics,
    duration_by_type,
    duration_of,
    productivity,
    total_free,
    total_occupied,
)
from zenith.metrics.types import MetricsConfig, ScheduleMetrics

__all__ = [
    "MetricsConfig",
    "ScheduleMetrics",
    "compute_metrics",
    "duration_by_type",
    "duration_of",
    "productivity",
    "total_free",
    "total_occupied",
]
