"""Validators for schedule commands.

Enforces required input before a transition is produced:
- Blocks need a title, a start time and an end time
- Activities need a name and either a duration or a preferred time
- Durations are non-negative, preferred hours fall within the day
- Updates to an unknown activity are rejected
- Settings values are non-negative

Clock strings are deliberately not parsed here: malformed times are stored
as given and contribute zero hours to metrics.
"""

from loguru import logger

from zenith.core.errors import CommandValidationError
from zenith.schedule.commands import (
    AddActivity,
    AddTimeBlock,
    RemoveActivity,
    RemoveTimeBlock,
    ScheduleCommand,
    SettingsPatch,
    UpdateActivity,
    UpdateSettings,
    UpdateTimeBlock,
)
from zenith.schedule.types import Activity, PreferredTime, ScheduleState, TimeBlock


def validate_time_block(block: TimeBlock) -> list[str]:
    """Validate required time block fields.

    Args:
        block: Block to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: list[str] = []
    if not block.title.strip():
        errors.append("Time block title is required")
    if not block.start_time.strip():
        errors.append("Time block start time is required")
    if not block.end_time.strip():
        errors.append("Time block end time is required")
    return errors


def validate_preferred_time(preferred_time: PreferredTime) -> list[str]:
    """Validate preferred hours fall within a single day."""
    errors: list[str] = []
    if not 0 <= preferred_time.start_hour <= 23:
        errors.append(f"Preferred start hour must be between 0 and 23, got {preferred_time.start_hour}")
    if not 0 <= preferred_time.end_hour <= 24:
        errors.append(f"Preferred end hour must be between 0 and 24, got {preferred_time.end_hour}")
    return errors


def validate_activity(activity: Activity) -> list[str]:
    """Validate required activity fields.

    Args:
        activity: Activity to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: list[str] = []
    if not activity.name.strip():
        errors.append("Activity name is required")
    if activity.duration is None and activity.preferred_time is None:
        errors.append("Activity needs a duration or a preferred time")
    if activity.duration is not None and activity.duration < 0:
        errors.append(f"Activity duration must be non-negative, got {activity.duration}")
    if activity.preferred_time is not None:
        errors.extend(validate_preferred_time(activity.preferred_time))
    return errors


def validate_settings_patch(patch: SettingsPatch) -> list[str]:
    """Validate that every explicitly set numeric setting is non-negative."""
    errors: list[str] = []
    for field in ("minimum_sleep_hours", "break_duration", "maximum_study_session"):
        value = getattr(patch, field)
        if value is not None and value < 0:
            errors.append(f"{field} must be non-negative, got {value}")
    if patch.minimum_sleep_hours is not None and patch.minimum_sleep_hours > 24:
        errors.append(f"minimum_sleep_hours must be <= 24, got {patch.minimum_sleep_hours}")
    return errors


def validate_command(state: ScheduleState, command: ScheduleCommand) -> None:
    """Validate a command against the current state.

    This is the main validation entry point. Commands without required
    input (ClearSchedule, ImportSchedule) always pass.

    Args:
        state: Current schedule state
        command: Command to validate

    Raises:
        CommandValidationError: If validation fails
    """
    errors: list[str] = []

    if isinstance(command, (AddTimeBlock, UpdateTimeBlock)):
        errors.extend(validate_time_block(command.block))
        if isinstance(command, UpdateTimeBlock) and not command.block.id:
            errors.append("Time block id is required for update")
    elif isinstance(command, RemoveTimeBlock):
        if not command.block_id:
            errors.append("Time block id is required for removal")
    elif isinstance(command, (AddActivity, UpdateActivity)):
        errors.extend(validate_activity(command.activity))
        if isinstance(command, UpdateActivity):
            if not command.activity.id:
                errors.append("Activity id is required for update")
            elif state.find_activity(command.activity.id) is None:
                errors.append(f"Activity {command.activity.id} not found")
    elif isinstance(command, RemoveActivity):
        if not command.activity_id:
            errors.append("Activity id is required for removal")
    elif isinstance(command, UpdateSettings):
        errors.extend(validate_settings_patch(command.settings))

    if errors:
        logger.info(f"Rejected {command.type}", errors=errors)
        raise CommandValidationError(errors)
