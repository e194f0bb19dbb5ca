"""Tests for the rule-based recommendations."""

from zenith.metrics.calculator import compute_metrics
from zenith.recommendations.rules import (
    build_recommendations,
    overview_recommendations,
    study_session_recommendations,
    study_tips,
    time_management_tips,
)
from zenith.schedule.types import WEEK_DAYS, Activity, ScheduleState, StudyTechniques, TimeBlock, UserSettings


def _rule_ids(recommendations) -> set[str]:
    return {r.rule_id for r in recommendations}


def _block(day: str, start: str, end: str, activity_type: str | None = None, title: str = "Block") -> TimeBlock:
    return TimeBlock(day=day, start_time=start, end_time=end, title=title, activity_type=activity_type)


def _overview(state: ScheduleState):
    return overview_recommendations(state, compute_metrics(state))


class TestOverview:
    """Tests for headline recommendations."""

    def test_empty_schedule_asks_for_setup(self, empty_state) -> None:
        recommendations = _overview(empty_state)

        assert _rule_ids(recommendations) == {"schedule_missing"}
        assert len(recommendations) == 2

    def test_light_week_is_balanced(self, calculus_block) -> None:
        """Test that a single class without activities triggers no warnings."""
        recommendations = _overview(ScheduleState(time_blocks=[calculus_block]))

        assert _rule_ids(recommendations) == {"week_balanced"}
        assert recommendations[0].severity == "info"

    def test_full_week_warns_about_free_time(self) -> None:
        state = ScheduleState(time_blocks=[_block(day, "00:00", "24:00") for day in WEEK_DAYS])

        recommendations = _overview(state)

        assert "free_time_low" in _rule_ids(recommendations)
        assert all(r.severity == "warning" for r in recommendations)

    def test_heavy_academic_load(self) -> None:
        """Test that 49 hours of class triggers the academic load warning."""
        state = ScheduleState(time_blocks=[_block(day, "08:00", "15:00", "academic") for day in WEEK_DAYS])

        assert _rule_ids(_overview(state)) == {"academic_load_high"}

    def test_activity_rules_need_activities(self, calculus_block, reading_activity) -> None:
        """Test that exercise and rest checks only fire once activities exist."""
        without = _overview(ScheduleState(time_blocks=[calculus_block]))
        with_activity = _overview(ScheduleState(time_blocks=[calculus_block], activities=[reading_activity]))

        assert "exercise_low" not in _rule_ids(without)
        assert {"exercise_low", "rest_low"} <= _rule_ids(with_activity)
        assert "academic_share_low" not in _rule_ids(with_activity)

    def test_low_academic_share(self, calculus_block) -> None:
        """Test that 2 academic hours out of 22 occupied is flagged."""
        state = ScheduleState(
            time_blocks=[calculus_block, _block("sábado", "00:00", "20:00", "work")],
            activities=[Activity(name="Shift", type="work", duration=1)],
        )

        assert "academic_share_low" in _rule_ids(_overview(state))


class TestStudyTips:
    """Tests for study technique advice."""

    def test_tight_schedule(self) -> None:
        state = ScheduleState(time_blocks=[_block(day, "00:00", "24:00") for day in WEEK_DAYS])

        tips = study_tips(compute_metrics(state))

        assert _rule_ids(tips) == {"study_tight_schedule"}
        assert len(tips) == 5

    def test_study_deficit(self, calculus_block) -> None:
        """Test that 2 hours of class and no study asks for more study time."""
        tips = study_tips(compute_metrics(ScheduleState(time_blocks=[calculus_block])))

        assert _rule_ids(tips) == {"study_deficit"}

    def test_study_balanced(self, calculus_block, reading_activity) -> None:
        state = ScheduleState(time_blocks=[calculus_block], activities=[reading_activity])

        assert _rule_ids(study_tips(compute_metrics(state))) == {"study_balanced"}


class TestTimeManagementTips:
    """Tests for time management advice."""

    def test_empty_week_flags_exercise_rest_and_social(self, empty_state) -> None:
        tips = time_management_tips(compute_metrics(empty_state))

        assert _rule_ids(tips) == {"exercise_low", "rest_low", "social_low"}
        assert len(tips) == 9

    def test_long_work_hours(self) -> None:
        state = ScheduleState(activities=[Activity(name="Job", type="work", duration=31)])

        tips = time_management_tips(compute_metrics(state))

        assert "work_high" in _rule_ids(tips)
        assert {r.severity for r in tips if r.rule_id == "work_high"} == {"warning"}

    def test_balanced_week(self) -> None:
        state = ScheduleState(
            activities=[
                Activity(name="Run", type="exercise", duration=3),
                Activity(name="Sleep in", type="rest", duration=7),
                Activity(name="Friends", type="social", duration=4),
            ]
        )

        assert _rule_ids(time_management_tips(compute_metrics(state))) == {"time_balanced"}


class TestStudySessions:
    """Tests for long study block detection."""

    def test_long_block_is_split(self) -> None:
        state = ScheduleState(time_blocks=[_block("jueves", "14:00", "18:00", "study", title="Revision")])

        recommendations = study_session_recommendations(state)

        assert len(recommendations) == 1
        message = recommendations[0].message
        assert "'Revision' on jueves runs 240 minutes" in message
        assert "2 sessions" in message
        assert "15-minute breaks" in message
        assert "Pomodoro" in message

    def test_no_pomodoro_note_when_disabled(self) -> None:
        state = ScheduleState(
            time_blocks=[_block("jueves", "14:00", "18:00", "study")],
            settings=UserSettings(study_techniques=StudyTechniques(pomodoro=False)),
        )

        assert "Pomodoro" not in study_session_recommendations(state)[0].message

    def test_block_within_limit_is_fine(self) -> None:
        state = ScheduleState(time_blocks=[_block("jueves", "14:00", "16:00", "study")])

        assert study_session_recommendations(state) == []

    def test_only_study_blocks_checked(self, calculus_block) -> None:
        state = ScheduleState(time_blocks=[calculus_block.model_copy(update={"end_time": "18:00"})])

        assert study_session_recommendations(state) == []


def test_build_recommendations_orders_categories(calculus_block) -> None:
    """Test that recommendations are grouped in presentation order."""
    recommendations = build_recommendations(ScheduleState(time_blocks=[calculus_block]))
    categories = [r.category for r in recommendations]

    assert categories[0] == "overview"
    assert categories.index("study") < categories.index("time_management")
    assert "study_session" not in categories
