"""Schedule reconciliation engine.

Applies one command at a time to a ScheduleState and returns the next
state, keeping each schedulable Activity and the TimeBlock it owns in sync.

Ownership rules (one canonical policy per operation):
- Removing a block de-links the owning activity, it never deletes it
- Removing an activity cascades to the block it owns
- Editing a linked block resyncs the activity's name, type and preference
- Editing an activity resyncs, creates or drops its owned block
- A block has at most one owner; the most recent link wins
- Re-linking an activity drops the block it owned before

The engine is pure: inputs are never mutated and nothing is persisted here.
"""

import uuid
from collections.abc import Callable

from loguru import logger

from zenith.core.errors import CommandValidationError
from zenith.schedule.commands import (
    AddActivity,
    AddTimeBlock,
    ClearSchedule,
    CommandResult,
    ImportSchedule,
    RemoveActivity,
    RemoveTimeBlock,
    ScheduleCommand,
    UpdateActivity,
    UpdateSettings,
    UpdateTimeBlock,
)
from zenith.schedule.types import Activity, PreferredTime, ScheduleState, TimeBlock
from zenith.schedule.validators import validate_command
from zenith.utils.clock import format_hour, parse_hour


def new_id() -> str:
    return str(uuid.uuid4())


def _require_schedulable(activity: Activity) -> None:
    if not activity.is_schedulable:
        raise ValueError(f"Activity {activity.id} has no preferred time and day to schedule")


def build_block_for_activity(activity: Activity, block_id: str) -> TimeBlock:
    """Create the occupied block a schedulable activity owns.

    The block sits on the first preferred day with "HH:00" start and end.

    Raises:
        ValueError: If the activity is not schedulable
    """
    _require_schedulable(activity)
    return TimeBlock(
        id=block_id,
        day=activity.preferred_days[0],
        start_time=format_hour(activity.preferred_time.start_hour),
        end_time=format_hour(activity.preferred_time.end_hour),
        type="occupied",
        title=activity.name,
        description=activity.description or "",
        activity_type=activity.type,
    )


def sync_block_from_activity(block: TimeBlock, activity: Activity) -> TimeBlock:
    """Copy the activity's schedule-relevant fields onto its owned block.

    Raises:
        ValueError: If the activity is not schedulable
    """
    _require_schedulable(activity)
    return block.model_copy(
        update={
            "day": activity.preferred_days[0],
            "start_time": format_hour(activity.preferred_time.start_hour),
            "end_time": format_hour(activity.preferred_time.end_hour),
            "title": activity.name,
            "description": activity.description or "",
            "activity_type": activity.type,
            "type": "occupied",
        }
    )


def sync_activity_from_block(activity: Activity, block: TimeBlock) -> Activity:
    """Copy a directly edited block back onto the activity that owns it.

    An unparseable start or end time keeps the activity's current
    preferred time rather than storing a broken one.
    """
    start_hour = parse_hour(block.start_time)
    end_hour = parse_hour(block.end_time)
    if start_hour is not None and end_hour is not None:
        preferred_time = PreferredTime(start_hour=start_hour, end_hour=end_hour)
    else:
        logger.debug(
            "Keeping preferred time, block times unparseable",
            block_id=block.id,
            start_time=block.start_time,
            end_time=block.end_time,
        )
        preferred_time = activity.preferred_time

    update: dict = {
        "name": block.title or activity.name,
        "description": block.description or "",
        "preferred_time": preferred_time,
        "preferred_days": [block.day],
    }
    if block.activity_type is not None:
        update["type"] = block.activity_type
    return activity.model_copy(update=update)


def _with_id(activity: Activity) -> Activity:
    """Assign an id and derive the duration where missing."""
    update: dict = {}
    if not activity.id:
        update["id"] = new_id()
    if activity.duration is None and activity.preferred_time is not None:
        update["duration"] = activity.preferred_time.hours
    return activity.model_copy(update=update) if update else activity


def _add_time_block(state: ScheduleState, command: AddTimeBlock) -> ScheduleState:
    block = command.block
    if not block.id:
        block = block.model_copy(update={"id": new_id()})
    return state.model_copy(update={"time_blocks": [*state.time_blocks, block]})


def _remove_time_block(state: ScheduleState, command: RemoveTimeBlock) -> ScheduleState:
    block_id = command.block_id
    activities = []
    for activity in state.activities:
        if activity.time_block_id == block_id:
            logger.info("De-linking activity from removed block", activity_id=activity.id, block_id=block_id)
            activity = activity.model_copy(update={"time_block_id": None})
        activities.append(activity)

    return state.model_copy(
        update={
            "time_blocks": [b for b in state.time_blocks if b.id != block_id],
            "activities": activities,
        }
    )


def _update_time_block(state: ScheduleState, command: UpdateTimeBlock) -> ScheduleState:
    block = command.block.model_copy(update={"type": "occupied"})
    if state.find_block(block.id) is None:
        logger.warning("Update references unknown time block", block_id=block.id)
        return state

    activities = [
        sync_activity_from_block(activity, block) if activity.time_block_id == block.id else activity
        for activity in state.activities
    ]
    return state.model_copy(
        update={
            "time_blocks": [block if b.id == block.id else b for b in state.time_blocks],
            "activities": activities,
        }
    )


def _add_activity(state: ScheduleState, command: AddActivity) -> ScheduleState:
    activity = _with_id(command.activity)

    if not activity.is_schedulable:
        if activity.time_block_id is not None:
            activity = activity.model_copy(update={"time_block_id": None})
        return state.model_copy(update={"activities": [*state.activities, activity]})

    block = build_block_for_activity(activity, new_id())
    activity = activity.model_copy(update={"time_block_id": block.id})
    logger.debug("Generated time block for activity", activity_id=activity.id, block_id=block.id)
    return state.model_copy(
        update={
            "activities": [*state.activities, activity],
            "time_blocks": [*state.time_blocks, block],
        }
    )


def _remove_activity(state: ScheduleState, command: RemoveActivity) -> ScheduleState:
    target = state.find_activity(command.activity_id)
    if target is None:
        logger.debug("Remove references unknown activity", activity_id=command.activity_id)
        return state

    time_blocks = state.time_blocks
    if target.time_block_id:
        logger.info("Removing owned block with activity", activity_id=target.id, block_id=target.time_block_id)
        time_blocks = [b for b in time_blocks if b.id != target.time_block_id]

    return state.model_copy(
        update={
            "activities": [a for a in state.activities if a.id != target.id],
            "time_blocks": time_blocks,
        }
    )


def _update_activity(state: ScheduleState, command: UpdateActivity) -> ScheduleState:
    current = state.find_activity(command.activity.id)
    if current is None:
        logger.warning("Update references unknown activity", activity_id=command.activity.id)
        return state

    activity = _with_id(command.activity)
    if activity.time_block_id is None and current.time_block_id is not None:
        activity = activity.model_copy(update={"time_block_id": current.time_block_id})

    time_blocks = state.time_blocks
    if current.time_block_id and current.time_block_id != activity.time_block_id:
        logger.info(
            "Dropping previously owned block, activity re-linked",
            activity_id=activity.id,
            block_id=current.time_block_id,
        )
        time_blocks = [b for b in time_blocks if b.id != current.time_block_id]

    if activity.time_block_id:
        linked = state.find_block(activity.time_block_id)
        if linked is None:
            logger.warning(
                "Activity links a missing time block, skipping resync",
                activity_id=activity.id,
                block_id=activity.time_block_id,
            )
        elif activity.is_schedulable:
            synced = sync_block_from_activity(linked, activity)
            time_blocks = [synced if b.id == linked.id else b for b in time_blocks]
        else:
            logger.info("Dropping orphaned block, activity no longer scheduled", activity_id=activity.id, block_id=linked.id)
            time_blocks = [b for b in time_blocks if b.id != linked.id]
            activity = activity.model_copy(update={"time_block_id": None})
    elif activity.is_schedulable:
        block = build_block_for_activity(activity, new_id())
        activity = activity.model_copy(update={"time_block_id": block.id})
        time_blocks = [*time_blocks, block]
        logger.debug("Generated time block for activity", activity_id=activity.id, block_id=block.id)

    activities = []
    for existing in state.activities:
        if existing.id == activity.id:
            existing = activity
        elif activity.time_block_id and existing.time_block_id == activity.time_block_id:
            logger.info("Block re-linked, clearing previous owner", activity_id=existing.id, block_id=activity.time_block_id)
            existing = existing.model_copy(update={"time_block_id": None})
        activities.append(existing)

    return state.model_copy(update={"activities": activities, "time_blocks": time_blocks})


def _update_settings(state: ScheduleState, command: UpdateSettings) -> ScheduleState:
    patch = command.settings
    update = {name: getattr(patch, name) for name in patch.model_fields_set if getattr(patch, name) is not None}
    return state.model_copy(update={"settings": state.settings.model_copy(update=update)})


def _clear_schedule(state: ScheduleState, _command: ClearSchedule) -> ScheduleState:
    return ScheduleState(settings=state.settings)


def _import_schedule(state: ScheduleState, command: ImportSchedule) -> ScheduleState:
    snapshot = command.snapshot
    update = {name: getattr(snapshot, name) for name in snapshot.model_fields_set if getattr(snapshot, name) is not None}
    return state.model_copy(update=update)


_HANDLERS: dict[str, Callable[[ScheduleState, ScheduleCommand], ScheduleState]] = {
    "ADD_TIME_BLOCK": _add_time_block,
    "REMOVE_TIME_BLOCK": _remove_time_block,
    "UPDATE_TIME_BLOCK": _update_time_block,
    "ADD_ACTIVITY": _add_activity,
    "REMOVE_ACTIVITY": _remove_activity,
    "UPDATE_ACTIVITY": _update_activity,
    "UPDATE_SETTINGS": _update_settings,
    "CLEAR_SCHEDULE": _clear_schedule,
    "IMPORT_SCHEDULE": _import_schedule,
}


def dispatch(state: ScheduleState, command: ScheduleCommand) -> CommandResult:
    """Validate and apply a command, reporting validation feedback.

    Args:
        state: Current schedule state
        command: Command to apply

    Returns:
        CommandResult with the next state, or the unchanged state and the
        validation errors when the command is rejected
    """
    try:
        validate_command(state, command)
    except CommandValidationError as e:
        return CommandResult(state=state, applied=False, errors=e.details)

    next_state = _HANDLERS[command.type](state, command)
    logger.debug(
        f"Applied {command.type}",
        time_blocks=len(next_state.time_blocks),
        activities=len(next_state.activities),
    )
    return CommandResult(state=next_state, applied=True)


def apply_command(state: ScheduleState, command: ScheduleCommand) -> ScheduleState:
    """Apply a command and return the next state.

    A command that fails validation leaves the state unchanged; use
    dispatch() to see why.
    """
    return dispatch(state, command).state
