"""Schedule commands.

Every change to the schedule is expressed as one of these explicit,
tagged commands - there is no free-form mutation. The ``type`` tag matches
the action names of the stored schedule, so a command can be parsed from a
plain dict with ``parse_command``.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from zenith.schedule.types import Activity, ScheduleState, StudyTechniques, TimeBlock, UserSettings


class Command(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class AddTimeBlock(Command):
    type: Literal["ADD_TIME_BLOCK"] = "ADD_TIME_BLOCK"
    block: TimeBlock


class RemoveTimeBlock(Command):
    type: Literal["REMOVE_TIME_BLOCK"] = "REMOVE_TIME_BLOCK"
    block_id: str = Field(alias="blockId")


class UpdateTimeBlock(Command):
    type: Literal["UPDATE_TIME_BLOCK"] = "UPDATE_TIME_BLOCK"
    block: TimeBlock


class AddActivity(Command):
    type: Literal["ADD_ACTIVITY"] = "ADD_ACTIVITY"
    activity: Activity


class RemoveActivity(Command):
    type: Literal["REMOVE_ACTIVITY"] = "REMOVE_ACTIVITY"
    activity_id: str = Field(alias="activityId")


class UpdateActivity(Command):
    type: Literal["UPDATE_ACTIVITY"] = "UPDATE_ACTIVITY"
    activity: Activity


class SettingsPatch(Command):
    """Partial settings. Only fields that were explicitly set are merged."""

    study_techniques: StudyTechniques | None = Field(default=None, alias="studyTechniques")
    minimum_sleep_hours: float | None = Field(default=None, alias="minimumSleepHours")
    break_duration: int | None = Field(default=None, alias="breakDuration")
    maximum_study_session: int | None = Field(default=None, alias="maximumStudySession")


class UpdateSettings(Command):
    type: Literal["UPDATE_SETTINGS"] = "UPDATE_SETTINGS"
    settings: SettingsPatch


class ClearSchedule(Command):
    type: Literal["CLEAR_SCHEDULE"] = "CLEAR_SCHEDULE"


class StatePatch(Command):
    """Partial schedule snapshot. Only fields that were explicitly set are merged."""

    time_blocks: list[TimeBlock] | None = Field(default=None, alias="timeBlocks")
    activities: list[Activity] | None = None
    settings: UserSettings | None = None


class ImportSchedule(Command):
    type: Literal["IMPORT_SCHEDULE"] = "IMPORT_SCHEDULE"
    snapshot: StatePatch


ScheduleCommand = Annotated[
    Union[
        AddTimeBlock,
        RemoveTimeBlock,
        UpdateTimeBlock,
        AddActivity,
        RemoveActivity,
        UpdateActivity,
        UpdateSettings,
        ClearSchedule,
        ImportSchedule,
    ],
    Field(discriminator="type"),
]

_command_adapter: TypeAdapter[ScheduleCommand] = TypeAdapter(ScheduleCommand)


def parse_command(data: dict) -> ScheduleCommand:
    """Parse a tagged command dict (e.g. {"type": "REMOVE_ACTIVITY", "activityId": "a1"}).

    Raises:
        pydantic.ValidationError: If the tag is unknown or the payload is malformed
    """
    return _command_adapter.validate_python(data)


class CommandResult(BaseModel):
    """Outcome of dispatching one command.

    Attributes:
        state: The next state (the unchanged input state when rejected)
        applied: Whether the command produced a transition
        errors: Validation feedback for the caller to surface
    """

    state: ScheduleState
    applied: bool
    errors: list[str] = Field(default_factory=list)
