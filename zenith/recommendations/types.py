"""Recommendation output models."""

from typing import Literal

from pydantic import BaseModel

RecommendationCategory = Literal["overview", "study", "time_management", "study_session"]


class Recommendation(BaseModel):
    """A single piece of advice produced by a triggered rule.

    Attributes:
        rule_id: Identifier of the rule that produced it
        category: Panel the advice belongs to
        severity: info for tips, warning for imbalances worth acting on
        message: Human-readable advice
    """

    rule_id: str
    category: RecommendationCategory
    severity: Literal["info", "warning"]
    message: str
