"""Tests for ScheduleService: load, dispatch and persist."""

from zenith.metrics.types import MetricsConfig
from zenith.schedule.commands import AddActivity, AddTimeBlock, RemoveActivity
from zenith.schedule.service import ScheduleService
from zenith.schedule.types import TimeBlock
from zenith.storage.json_store import JsonStateStore


def _service(path) -> ScheduleService:
    return ScheduleService(JsonStateStore(path))


def test_execute_persists_applied_command(state_file, calculus_block) -> None:
    """Test that an applied command is written to the store."""
    service = _service(state_file)

    result = service.execute(AddTimeBlock(block=calculus_block))

    assert result.applied is True
    assert state_file.exists()
    assert _service(state_file).state().time_blocks == result.state.time_blocks


def test_rejected_command_does_not_write(state_file) -> None:
    """Test that a rejected command leaves nothing on disk."""
    service = _service(state_file)
    block = TimeBlock(day="lunes", start_time="08:00", end_time="09:00", title="")

    result = service.execute(AddTimeBlock(block=block))

    assert result.applied is False
    assert not state_file.exists()


def test_commands_apply_to_stored_state(state_file, gym_activity) -> None:
    """Test that each command sees the state saved by the previous one."""
    service = _service(state_file)
    added = service.execute(AddActivity(activity=gym_activity))

    service.execute(RemoveActivity(activity_id=added.state.activities[0].id))

    stored = service.state()
    assert stored.activities == []
    assert stored.time_blocks == []


def test_metrics_use_configured_denominator(state_file, calculus_block) -> None:
    """Test that metrics and recommendations share the service's config."""
    service = ScheduleService(JsonStateStore(state_file), MetricsConfig(available_hours_per_day=10))
    service.execute(AddTimeBlock(block=calculus_block))

    metrics = service.metrics()

    assert metrics.available_hours == 70
    assert metrics.total_free == 68
    assert service.recommendations()
