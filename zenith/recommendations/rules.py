"""Rule-based schedule recommendations.

Each rule reads the derived metrics (never the raw clock strings) and
emits one or more Recommendation records tagged with its rule_id. Rules
are grouped the way they are presented: an overview, study technique
tips, time management tips and study session length checks.
"""

import math

from zenith.metrics.calculator import DEFAULT_CONFIG, compute_metrics, duration_of
from zenith.metrics.types import MetricsConfig, ScheduleMetrics
from zenith.recommendations.types import Recommendation, RecommendationCategory
from zenith.schedule.types import ScheduleState

MIN_FREE_PERCENT = 15
MIN_ACADEMIC_PERCENT = 30
MIN_EXERCISE_HOURS = 3
MIN_REST_SHARE_OF_OCCUPIED = 0.15
MAX_ACADEMIC_HOURS = 40
TIGHT_FREE_HOURS = 10
STUDY_PER_CLASS_HOUR = 0.5
MIN_REST_HOURS = 7
MIN_SOCIAL_HOURS = 4
MAX_WORK_HOURS = 30


def _tips(
    rule_id: str,
    category: RecommendationCategory,
    messages: list[str],
    severity: str = "info",
) -> list[Recommendation]:
    return [Recommendation(rule_id=rule_id, category=category, severity=severity, message=m) for m in messages]


def overview_recommendations(state: ScheduleState, metrics: ScheduleMetrics) -> list[Recommendation]:
    """Headline advice about the overall shape of the week.

    Activity-dependent rules only fire once at least one activity exists.
    """
    if not state.time_blocks:
        return _tips(
            "schedule_missing",
            "overview",
            [
                "Set up your schedule to get personalised recommendations.",
                "Add all of your classes and fixed weekly commitments.",
            ],
        )

    has_activities = bool(state.activities)
    by_type = metrics.duration_by_type
    occupied = metrics.total_occupied
    academic_hours = by_type["academic"] + by_type["study"]
    recommendations: list[Recommendation] = []

    if metrics.available_hours > 0 and metrics.total_free / metrics.available_hours * 100 < MIN_FREE_PERCENT:
        recommendations += _tips(
            "free_time_low",
            "overview",
            ["Your week is very full. Consider dropping some activities to avoid burnout."],
            severity="warning",
        )

    if has_activities and occupied > 0 and academic_hours / occupied * 100 < MIN_ACADEMIC_PERCENT:
        recommendations += _tips(
            "academic_share_low",
            "overview",
            [f"Aim to spend at least {MIN_ACADEMIC_PERCENT}% of your time on classes and study."],
            severity="warning",
        )

    if has_activities and by_type["exercise"] < MIN_EXERCISE_HOURS:
        recommendations += _tips(
            "exercise_low",
            "overview",
            [f"Try to fit in at least {MIN_EXERCISE_HOURS} hours of exercise a week to stay balanced."],
            severity="warning",
        )

    if has_activities and by_type["rest"] < occupied * MIN_REST_SHARE_OF_OCCUPIED:
        recommendations += _tips(
            "rest_low",
            "overview",
            [f"Schedule more rest. At least {int(MIN_REST_SHARE_OF_OCCUPIED * 100)}% of your occupied time is recommended."],
            severity="warning",
        )

    if academic_hours > MAX_ACADEMIC_HOURS:
        recommendations += _tips(
            "academic_load_high",
            "overview",
            ["Your academic load is high. Spread your study time out and keep time for rest."],
            severity="warning",
        )

    if not recommendations:
        recommendations += _tips("week_balanced", "overview", ["Your time looks well balanced!"])

    return recommendations


def study_tips(metrics: ScheduleMetrics) -> list[Recommendation]:
    """Study technique advice. Exactly one rule fires."""
    study_hours = metrics.duration_by_type["study"]
    academic_hours = metrics.duration_by_type["academic"]

    if metrics.total_free < TIGHT_FREE_HOURS:
        return _tips(
            "study_tight_schedule",
            "study",
            [
                "Tackle your hardest subjects when your energy is highest.",
                "Use the Pomodoro technique (25 min study / 5 min break) to stay focused.",
                "Set very specific goals for every study session.",
                "Use short gaps between activities for quick reviews.",
                "Mix media and study methods to get more out of limited time.",
            ],
        )

    if study_hours < academic_hours * STUDY_PER_CLASS_HOUR:
        return _tips(
            "study_deficit",
            "study",
            [
                "Increase your study hours. At least 1 hour of study for every 2 hours of class is recommended.",
                "Use spaced repetition to improve retention.",
                "Schedule study sessions right after your most demanding classes.",
                "Build mind maps or summaries to consolidate what you learn.",
                "Keep a fixed study timetable to build the habit.",
            ],
        )

    return _tips(
        "study_balanced",
        "study",
        [
            "Your study balance is good. Keep it consistent.",
            "Alternate study techniques to stay engaged.",
            "Consider study groups for the most demanding subjects.",
            "Review and adjust your study techniques regularly.",
            "Celebrate your progress and keep a record of it.",
        ],
    )


def time_management_tips(metrics: ScheduleMetrics) -> list[Recommendation]:
    """Advice on how time is split between exercise, rest, social life and work."""
    by_type = metrics.duration_by_type
    tips: list[Recommendation] = []

    if by_type["exercise"] < MIN_EXERCISE_HOURS:
        tips += _tips(
            "exercise_low",
            "time_management",
            [
                f"Fit in at least {MIN_EXERCISE_HOURS} hours of exercise a week to improve focus and wellbeing.",
                "Short activities count too, like walking between classes or desk exercises.",
                "Regular exercise improves memory and reduces stress.",
            ],
        )

    if by_type["rest"] < MIN_REST_HOURS:
        tips += _tips(
            "rest_low",
            "time_management",
            [
                "Plan more time for rest and leisure. It is key to staying productive.",
                "Add short breaks between intense activities.",
                "Keep a regular sleep schedule.",
            ],
        )

    if by_type["social"] < MIN_SOCIAL_HOURS:
        tips += _tips(
            "social_low",
            "time_management",
            [
                "Do not underestimate social time for your wellbeing.",
                "Plan social activities that also support your academic goals.",
                "Balance your responsibilities with your social life.",
            ],
        )

    if by_type["work"] > MAX_WORK_HOURS:
        tips += _tips(
            "work_high",
            "time_management",
            [
                "You are spending many hours at work. Make sure you keep a balance.",
                "Consider productivity techniques to make the most of your time.",
                "Set aside specific time for rest and recovery.",
            ],
            severity="warning",
        )

    if not tips:
        tips += _tips(
            "time_balanced",
            "time_management",
            [
                "Your time across activities looks balanced. Good job!",
                "Keep monitoring your progress and adjust as needed.",
                "Share your organisation techniques with others.",
            ],
        )

    return tips


def study_session_recommendations(state: ScheduleState) -> list[Recommendation]:
    """Flag study blocks longer than the configured maximum session."""
    max_minutes = state.settings.maximum_study_session
    if max_minutes <= 0:
        return []

    recommendations: list[Recommendation] = []
    for block in state.time_blocks:
        if block.type != "occupied" or block.activity_type != "study":
            continue
        minutes = duration_of(block) * 60
        if minutes <= max_minutes:
            continue
        sessions = math.ceil(minutes / max_minutes)
        message = (
            f"'{block.title}' on {block.day} runs {minutes:.0f} minutes. Split it into {sessions} sessions "
            f"of at most {max_minutes} minutes with {state.settings.break_duration}-minute breaks."
        )
        if state.settings.study_techniques.pomodoro:
            message += " Pomodoro cycles work well inside each session."
        recommendations.append(
            Recommendation(rule_id="study_session_too_long", category="study_session", severity="warning", message=message)
        )
    return recommendations


def build_recommendations(state: ScheduleState, config: MetricsConfig = DEFAULT_CONFIG) -> list[Recommendation]:
    """All recommendations for the current state.

    Args:
        state: Schedule state
        config: Metrics configuration shared with the metrics report

    Returns:
        Recommendations in presentation order
    """
    metrics = compute_metrics(state, config)
    return [
        *overview_recommendations(state, metrics),
        *study_tips(metrics),
        *time_management_tips(metrics),
        *study_session_recommendations(state),
    ]
