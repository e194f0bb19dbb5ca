"""Schedule state models.

This module defines the records the reconciliation engine operates on:
- TimeBlock: a fixed interval on one weekday (occupied or free)
- Activity: a task with a target duration and optional scheduling preference
- UserSettings: study preferences persisted alongside the schedule
- ScheduleState: the single value passed through every command

Attributes are snake_case; the persisted form uses the camelCase keys of the
stored schedule (timeBlocks, startTime, timeBlockId, ...). Both spellings
are accepted on input. Models are frozen: transitions build new instances.
"""

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

from zenith.utils.clock import span_hours

DayOfWeek = Literal["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
BlockType = Literal["occupied", "free"]
ActivityType = Literal["academic", "work", "study", "exercise", "rest", "social", "personal", "other"]
Priority = Literal["high", "medium", "low"]

WEEK_DAYS: tuple[DayOfWeek, ...] = get_args(DayOfWeek)
ACTIVITY_TYPES: tuple[ActivityType, ...] = get_args(ActivityType)


class ScheduleModel(BaseModel):
    """Base for persisted schedule records."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class TimeBlock(ScheduleModel):
    """A fixed interval on one day of the week.

    A block whose end_time is earlier than its start_time crosses midnight.
    Times are not validated here; see zenith.utils.clock.

    Attributes:
        id: Stable identity (assigned by the engine when absent)
        day: Weekday label
        start_time: Start clock time ("HH:MM")
        end_time: End clock time ("HH:MM")
        type: occupied or free
        title: Display title
        description: Optional description
        location: Optional location
        activity_type: Optional category tag
        color: Optional display color
    """

    id: str | None = None
    day: DayOfWeek
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    type: BlockType = "occupied"
    title: str = ""
    description: str | None = None
    location: str | None = None
    activity_type: ActivityType | None = Field(default=None, alias="activityType")
    color: str | None = None


class PreferredTime(ScheduleModel):
    """Preferred daily window for an activity, in whole hours."""

    start_hour: int = Field(alias="startHour")
    end_hour: int = Field(alias="endHour")

    @property
    def hours(self) -> float:
        return span_hours(self.start_hour, self.end_hour)


class TimeSlot(ScheduleModel):
    """Concrete slot recorded on an activity by earlier versions of the stored schedule."""

    day: DayOfWeek
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")


class Activity(ScheduleModel):
    """A user-defined task with a desired duration.

    An activity with a preferred time and at least one preferred day is
    schedulable and owns exactly one TimeBlock, referenced by time_block_id.

    Attributes:
        id: Stable identity (assigned by the engine when absent)
        name: Activity name
        type: Category
        duration: Hours per occurrence (derived from preferred_time when omitted)
        priority: high, medium or low
        description: Optional description
        preferred_time: Optional daily window
        preferred_days: Optional weekdays
        time_slot: Optional stored slot, kept as given (not used for scheduling)
        time_block_id: ID of the owned TimeBlock, if any
    """

    id: str | None = None
    name: str = ""
    type: ActivityType
    duration: float | None = None
    priority: Priority = "medium"
    description: str | None = None
    preferred_time: PreferredTime | None = Field(default=None, alias="preferredTime")
    preferred_days: list[DayOfWeek] | None = Field(default=None, alias="preferredDays")
    time_slot: TimeSlot | None = Field(default=None, alias="timeSlot")
    time_block_id: str | None = Field(default=None, alias="timeBlockId")

    @property
    def is_schedulable(self) -> bool:
        return self.preferred_time is not None and bool(self.preferred_days)

    @property
    def day_count(self) -> int:
        """Number of preferred days, at least one."""
        return max(1, len(self.preferred_days or []))


class StudyTechniques(ScheduleModel):
    pomodoro: bool = True
    feynman: bool = False
    spaced: bool = False
    concept_mapping: bool = Field(default=False, alias="conceptMapping")


class UserSettings(ScheduleModel):
    """Study preferences stored with the schedule.

    Attributes:
        study_techniques: Enabled study techniques
        minimum_sleep_hours: Minimum nightly sleep in hours
        break_duration: Break length in minutes
        maximum_study_session: Longest study session in minutes
    """

    study_techniques: StudyTechniques = Field(default_factory=StudyTechniques, alias="studyTechniques")
    minimum_sleep_hours: float = Field(default=7, alias="minimumSleepHours")
    break_duration: int = Field(default=15, alias="breakDuration")
    maximum_study_session: int = Field(default=120, alias="maximumStudySession")


class ScheduleState(ScheduleModel):
    """Complete schedule state: blocks, activities and settings."""

    time_blocks: list[TimeBlock] = Field(default_factory=list, alias="timeBlocks")
    activities: list[Activity] = Field(default_factory=list)
    settings: UserSettings = Field(default_factory=UserSettings)

    def find_block(self, block_id: str | None) -> TimeBlock | None:
        if block_id is None:
            return None
        return next((b for b in self.time_blocks if b.id == block_id), None)

    def find_activity(self, activity_id: str | None) -> Activity | None:
        if activity_id is None:
            return None
        return next((a for a in self.activities if a.id == activity_id), None)


def initial_state() -> ScheduleState:
    """Empty schedule with default settings."""
    return ScheduleState()
