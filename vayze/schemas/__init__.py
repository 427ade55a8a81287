"""
Vayze — schema registry.

Every engine data model is importable from here.
"""

from vayze.schemas.confidence import ConfidenceFactors, ConfidenceScoreResult
from vayze.schemas.decision import Decision, DecisionStatistics
from vayze.schemas.explanation import Explanation, ExplanationInsight, Factor, FactorBuckets
from vayze.schemas.insight import Insight
from vayze.schemas.preset import WeightPreset, WeightVector
from vayze.schemas.profile import (
    Archetype,
    DecisionProfile,
    GrowthArea,
    ProfileMetrics,
    Recommendation,
    Strength,
)
from vayze.schemas.review import Review

__all__ = [
    "Archetype",
    "ConfidenceFactors",
    "ConfidenceScoreResult",
    "Decision",
    "DecisionProfile",
    "DecisionStatistics",
    "Explanation",
    "ExplanationInsight",
    "Factor",
    "FactorBuckets",
    "GrowthArea",
    "Insight",
    "ProfileMetrics",
    "Recommendation",
    "Review",
    "Strength",
    "WeightPreset",
    "WeightVector",
]
