"""Schedule metrics calculator.

Occupied hours count every occupied block in full: no sleep-window
exclusion or clipping is applied. Free time and productivity share one
weekly denominator (MetricsConfig.available_hours_per_week) so that every
consumer reports consistent percentages.
"""

import math

from loguru import logger

from zenith.metrics.types import Balance, MetricsConfig, ProductivityLevel, ScheduleMetrics
from zenith.schedule.types import ACTIVITY_TYPES, Activity, ActivityType, ScheduleState, TimeBlock
from zenith.utils.clock import parse_clock, span_hours

DEFAULT_CONFIG = MetricsConfig()


def duration_of(block: TimeBlock) -> float:
    """Hours between a block's start and end.

    A block ending before it starts crosses midnight and lasts
    (24 - start) + end hours.

    Args:
        block: Time block

    Returns:
        Non-negative hours, 0.0 if either time is unparseable
    """
    start = parse_clock(block.start_time)
    end = parse_clock(block.end_time)
    if start is None or end is None:
        logger.debug(
            "Unparseable block time, counting zero hours",
            block_id=block.id,
            start_time=block.start_time,
            end_time=block.end_time,
        )
        return 0.0
    return span_hours(start, end)


def total_occupied(state: ScheduleState) -> float:
    """Sum of durations over all occupied blocks."""
    return sum(duration_of(b) for b in state.time_blocks if b.type == "occupied")


def total_free(state: ScheduleState, config: MetricsConfig = DEFAULT_CONFIG) -> float:
    """Available weekly hours minus occupied hours, floored at zero."""
    return max(0.0, config.available_hours_per_week - total_occupied(state))


def duration_by_type(state: ScheduleState, activity_type: ActivityType) -> float:
    """Weekly hours spent on one category.

    Occupied blocks tagged with the category count by their duration.
    Activities of the category without a linked block count as
    duration x max(1, number of preferred days). An activity whose link
    points at a block that no longer exists is treated as unlinked.

    Args:
        state: Schedule state
        activity_type: Category to total

    Returns:
        Hours for the category
    """
    block_ids = {b.id for b in state.time_blocks if b.id is not None}
    block_hours = sum(
        duration_of(b) for b in state.time_blocks if b.type == "occupied" and b.activity_type == activity_type
    )
    activity_hours = sum(
        _planned_hours(a)
        for a in state.activities
        if a.type == activity_type and (a.time_block_id is None or a.time_block_id not in block_ids)
    )
    return block_hours + activity_hours


def _planned_hours(activity: Activity) -> float:
    """Hours an unlinked activity contributes: duration per preferred day."""
    if activity.duration is None or not math.isfinite(activity.duration):
        return 0.0
    return activity.duration * activity.day_count


def productivity(state: ScheduleState, config: MetricsConfig = DEFAULT_CONFIG) -> int:
    """Productive share of available weekly hours.

    Returns:
        Integer percentage in [0, 100]
    """
    available = config.available_hours_per_week
    if available <= 0:
        return 0
    productive_hours = sum(duration_by_type(state, t) for t in set(config.productive_types))
    percentage = _round_half_up(productive_hours / available * 100)
    return max(0, min(100, percentage))


def balance_for(occupied: float, available: float) -> Balance:
    if occupied > available * 0.7:
        return "overloaded"
    if occupied > available * 0.5:
        return "busy"
    return "balanced"


def productivity_level_for(score: int) -> ProductivityLevel:
    if score < 40:
        return "low"
    if score < 70:
        return "moderate"
    return "high"


def compute_metrics(state: ScheduleState, config: MetricsConfig = DEFAULT_CONFIG) -> ScheduleMetrics:
    """Compute every derived figure for the current state.

    Args:
        state: Schedule state
        config: Weekly denominator and productive categories

    Returns:
        ScheduleMetrics
    """
    occupied = total_occupied(state)
    available = config.available_hours_per_week
    score = productivity(state, config)
    occupancy = _round_half_up(occupied / available * 100) if available > 0 else 0

    return ScheduleMetrics(
        total_occupied=occupied,
        total_free=total_free(state, config),
        productivity=score,
        duration_by_type={t: duration_by_type(state, t) for t in ACTIVITY_TYPES},
        available_hours=available,
        occupancy_percent=occupancy,
        balance=balance_for(occupied, available),
        productivity_level=productivity_level_for(score),
    )


def _round_half_up(value: float) -> int:
    if not math.isfinite(value):
        return 100 if value == math.inf else 0
    return int(math.floor(value + 0.5))
