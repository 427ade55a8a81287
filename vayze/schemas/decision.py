from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import Field, ValidationInfo, field_validator

from vayze.schemas.base import VayzeModel
from vayze.schemas.explanation import Explanation
from vayze.schemas.review import Review

Mode = Literal["full", "quick"]
RecommendationValue = Literal["yes", "no", "unclear"]


class Decision(VayzeModel):
    """The central journaled entity.

    Created in progress (answers accumulate), finalised once (score,
    recommendation, explanation and ``completed_at`` set together) and
    optionally reviewed later.  ``answers`` is an opaque mapping keyed by
    step identifier (``step1``..``step6`` or ``quickGut``/``quickProCon``).
    """

    id: str
    user_id: Optional[str] = None
    decision: str = ""
    category: str = "other"
    mode: Mode = "full"
    weight_preset: str = "balanced"
    answers: dict[str, Any] = Field(default_factory=dict)
    final_score: Optional[int] = Field(default=None, ge=0, le=100)
    recommendation: Optional[RecommendationValue] = None
    explanation: Optional[Explanation] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    review_scheduled_for: Optional[datetime] = None
    review: Optional[Review] = None
    review_reminded: bool = False

    @field_validator(
        "decision", "category", "mode", "weight_preset", "answers", "review_reminded", mode="before",
    )
    @classmethod
    def _null_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        """Exports carry ``null`` for fields the app never filled in."""
        if v is None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return v

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


class DecisionStatistics(VayzeModel):
    total_decisions: int
    total_reviews: int
    yes_count: int
    no_count: int
    unclear_count: int
    quick_count: int
    full_count: int
    avg_confidence: int
    review_rate: float
