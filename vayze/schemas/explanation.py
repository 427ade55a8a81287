from pydantic import Field

from vayze.schemas.base import VayzeModel


class Factor(VayzeModel):
    label: str
    description: str
    strength: float
    icon: str


class FactorBuckets(VayzeModel):
    """Qualitative factors, each bucket sorted by descending strength."""

    positive: list[Factor] = []
    negative: list[Factor] = []
    neutral: list[Factor] = []


class ExplanationInsight(VayzeModel):
    type: str  # clarity / uncertainty / conflict / dominant
    icon: str
    text: str
    detail: str


class Explanation(VayzeModel):
    summary: str
    factors: FactorBuckets
    insights: list[ExplanationInsight] = Field(default_factory=list, max_length=3)
    confidence: float
