"""Rule-based recommendations derived from schedule metrics."""

from zenith.recommendations.rules import (
    build_recommendations,
    overview_recommendations,
    study_session_recommendations,
    study_tips,
    time_management_tips,
)
from zenith.recommendations.types import Recommendation

__all__ = [
    "Recommendation",
    "build_recommendations",
    "overview_recommendations",
    "study_session_recommendations",
    "study_tips",
    "time_management_tips",
]
