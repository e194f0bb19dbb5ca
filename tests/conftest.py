"""Root conftest for all tests.

This file makes shared schedule fixtures available across all test modules.
"""

from pathlib import Path

import pytest

from zenith.schedule.types import Activity, PreferredTime, ScheduleState, TimeBlock, initial_state


@pytest.fixture
def empty_state() -> ScheduleState:
    """Initial schedule with default settings."""
    return initial_state()


@pytest.fixture
def calculus_block() -> TimeBlock:
    """Monday morning class, no id assigned yet."""
    return TimeBlock(
        day="lunes",
        start_time="08:00",
        end_time="10:00",
        type="occupied",
        activity_type="academic",
        title="Calculus",
    )


@pytest.fixture
def gym_activity() -> Activity:
    """Schedulable exercise activity (Tuesday 18-19h), no id assigned yet."""
    return Activity(
        name="Gym",
        type="exercise",
        duration=1,
        preferred_time=PreferredTime(start_hour=18, end_hour=19),
        preferred_days=["martes"],
    )


@pytest.fixture
def reading_activity() -> Activity:
    """Unscheduled study activity: 2 hours on three days."""
    return Activity(
        id="reading",
        name="Reading",
        type="study",
        duration=2,
        preferred_days=["lunes", "miércoles", "viernes"],
    )


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    """Path for a schedule file that does not exist yet."""
    return tmp_path / "zenith" / "state.json"
