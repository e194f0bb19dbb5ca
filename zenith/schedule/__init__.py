"""Schedule module - reconciliation of time blocks and activities.

This module provides:
- The schedule state models
- Tagged commands and their validators
- The pure reconciliation engine (apply_command, dispatch)
"""

from zenith.schedule.commands import (
    AddActivity,
    AddTimeBlock,
    ClearSchedule,
    CommandResult,
    ImportSchedule,
    RemoveActivity,
    RemoveTimeBlock,
    ScheduleCommand,
    SettingsPatch,
    StatePatch,
    UpdateActivity,
    UpdateSettings,
    UpdateTimeBlock,
    parse_command,
)
from zenith.schedule.reducer import apply_command, dispatch
from zenith.schedule.types import (
    Activity,
    PreferredTime,
    ScheduleState,
    StudyTechniques,
    TimeBlock,
    UserSettings,
    initial_state,
)

__all__ = [
    "Activity",
    "AddActivity",
    "AddTimeBlock",
    "ClearSchedule",
    "CommandResult",
    "ImportSchedule",
    "PreferredTime",
    "RemoveActivity",
    "RemoveTimeBlock",
    "ScheduleCommand",
    "ScheduleState",
    "SettingsPatch",
    "StatePatch",
    "StudyTechniques",
    "TimeBlock",
    "UpdateActivity",
    "UpdateSettings",
    "UpdateTimeBlock",
    "UserSettings",
    "apply_command",
    "dispatch",
    "initial_state",
    "parse_command",
]
