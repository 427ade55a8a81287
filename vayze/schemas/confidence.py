from typing import Literal

from vayze.schemas.base import VayzeModel

Trend = Literal["improving", "declining", "stable", "neutral"]


class ConfidenceFactors(VayzeModel):
    clarity: int = 0
    success: int = 0
    consistency: int = 0
    growth: int = 0


class ConfidenceScoreResult(VayzeModel):
    """Longitudinal decision-confidence score, recomputed on every call."""

    score: int
    trend: Trend
    factors: ConfidenceFactors
    insights: list[str]
    message: str
