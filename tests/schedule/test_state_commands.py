"""Tests for settings, clear and import commands and command parsing."""

import pytest
from pydantic import ValidationError

from zenith.schedule.commands import (
    AddActivity,
    AddTimeBlock,
    ClearSchedule,
    ImportSchedule,
    RemoveActivity,
    SettingsPatch,
    StatePatch,
    UpdateSettings,
    parse_command,
)
from zenith.schedule.reducer import apply_command, dispatch
from zenith.schedule.types import StudyTechniques, UserSettings


class TestUpdateSettings:
    """Tests for UPDATE_SETTINGS."""

    def test_shallow_merge(self, empty_state) -> None:
        """Test that only the provided setting changes."""
        state = apply_command(empty_state, UpdateSettings(settings=SettingsPatch(break_duration=30)))

        assert state.settings.break_duration == 30
        assert state.settings.minimum_sleep_hours == 7
        assert state.settings.maximum_study_session == 120
        assert state.settings.study_techniques.pomodoro is True

    def test_replaces_study_techniques(self, empty_state) -> None:
        """Test that study techniques are replaced as a whole."""
        techniques = StudyTechniques(pomodoro=False, feynman=True)
        state = apply_command(empty_state, UpdateSettings(settings=SettingsPatch(study_techniques=techniques)))

        assert state.settings.study_techniques == techniques

    def test_rejects_negative_values(self, empty_state) -> None:
        """Test that negative settings are rejected."""
        result = dispatch(empty_state, UpdateSettings(settings=SettingsPatch(maximum_study_session=-5)))

        assert result.applied is False
        assert result.state.settings.maximum_study_session == 120

    def test_leaves_schedule_untouched(self, empty_state, calculus_block) -> None:
        """Test that settings changes do not touch blocks or activities."""
        state = apply_command(empty_state, AddTimeBlock(block=calculus_block))
        after = apply_command(state, UpdateSettings(settings=SettingsPatch(minimum_sleep_hours=8)))

        assert after.time_blocks == state.time_blocks


class TestClearSchedule:
    """Tests for CLEAR_SCHEDULE."""

    def test_clears_blocks_and_activities_keeps_settings(self, empty_state, calculus_block, gym_activity) -> None:
        """Test that clearing keeps the user's settings."""
        state = apply_command(empty_state, UpdateSettings(settings=SettingsPatch(break_duration=20)))
        state = apply_command(state, AddTimeBlock(block=calculus_block))
        state = apply_command(state, AddActivity(activity=gym_activity))

        state = apply_command(state, ClearSchedule())

        assert state.time_blocks == []
        assert state.activities == []
        assert state.settings.break_duration == 20


class TestImportSchedule:
    """Tests for IMPORT_SCHEDULE."""

    def test_partial_snapshot_merges(self, empty_state, calculus_block, reading_activity) -> None:
        """Test that fields missing from the snapshot are preserved."""
        state = apply_command(empty_state, AddTimeBlock(block=calculus_block))

        state = apply_command(state, ImportSchedule(snapshot=StatePatch(activities=[reading_activity])))

        assert len(state.time_blocks) == 1
        assert state.activities == [reading_activity]

    def test_full_snapshot_replaces(self, empty_state, calculus_block) -> None:
        """Test that every provided field replaces the current value."""
        state = apply_command(empty_state, AddTimeBlock(block=calculus_block))
        snapshot = StatePatch(time_blocks=[], activities=[], settings=UserSettings(break_duration=5))

        state = apply_command(state, ImportSchedule(snapshot=snapshot))

        assert state.time_blocks == []
        assert state.settings.break_duration == 5

    def test_snapshot_from_stored_document(self, empty_state) -> None:
        """Test that a camelCase document can be imported."""
        snapshot = StatePatch.model_validate(
            {
                "timeBlocks": [
                    {"id": "b1", "day": "lunes", "startTime": "09:00", "endTime": "11:00", "type": "occupied", "title": "Physics"}
                ]
            }
        )

        state = apply_command(empty_state, ImportSchedule(snapshot=snapshot))

        assert state.time_blocks[0].title == "Physics"
        assert state.activities == []


class TestParseCommand:
    """Tests for parsing tagged command dicts."""

    def test_parses_remove_activity(self) -> None:
        command = parse_command({"type": "REMOVE_ACTIVITY", "activityId": "a1"})

        assert isinstance(command, RemoveActivity)
        assert command.activity_id == "a1"

    def test_parses_add_time_block(self) -> None:
        command = parse_command(
            {
                "type": "ADD_TIME_BLOCK",
                "block": {"day": "martes", "startTime": "10:00", "endTime": "12:00", "title": "Chemistry"},
            }
        )

        assert isinstance(command, AddTimeBlock)
        assert command.block.start_time == "10:00"

    def test_parses_clear(self) -> None:
        assert isinstance(parse_command({"type": "CLEAR_SCHEDULE"}), ClearSchedule)

    def test_rejects_unknown_tag(self) -> None:
        with pytest.raises(ValidationError):
            parse_command({"type": "DELETE_EVERYTHING"})

    def test_rejects_unknown_day(self) -> None:
        with pytest.raises(ValidationError):
            parse_command(
                {
                    "type": "ADD_TIME_BLOCK",
                    "block": {"day": "monday", "startTime": "10:00", "endTime": "12:00", "title": "X"},
                }
            )
