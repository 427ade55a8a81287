from datetime import datetime
from typing import Literal, Optional

from vayze.schemas.base import VayzeModel
from vayze.schemas.confidence import Trend


class ProfileMetrics(VayzeModel):
    avg_confidence: int = 0
    mode_preference: int = 0        # % quick-mode decisions
    decision_balance: int = 0       # % "yes" recommendations
    category_distribution: dict[str, int] = {}
    avg_success_score: int = 0
    preset_preference: str = "balanced"
    consistency: int = 0
    avg_decision_time_minutes: int = 0
    clarity_trend: Trend = "neutral"
    total_decisions: int = 0
    total_reviews: int = 0


class Archetype(VayzeModel):
    id: str
    name: str
    icon: str
    description: str
    traits: list[str]
    color: str


class Strength(VayzeModel):
    icon: str
    title: str
    description: str


class GrowthArea(VayzeModel):
    icon: str
    title: str
    description: str
    actionable: bool = True


class Recommendation(VayzeModel):
    text: str
    priority: Literal["low", "medium", "high"]


class DecisionProfile(VayzeModel):
    """Behavioural profile derived from the full decision/review history.

    ``archetype`` is None and the lists are empty when there are no
    decisions; check ``metrics.total_decisions`` before trusting it.
    """

    metrics: ProfileMetrics
    archetype: Optional[Archetype] = None
    strengths: list[Strength] = []
    growth_areas: list[GrowthArea] = []
    recommendations: list[Recommendation] = []
    generated_at: datetime
