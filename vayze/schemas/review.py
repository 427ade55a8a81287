import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from vayze.schemas.base import VayzeModel

Outcome = Literal["good", "neutral", "bad"]


def _review_id() -> str:
    return f"review_{uuid.uuid4().hex}"


class Review(VayzeModel):
    """Post-decision reflection, attached 1:1 to a decision via ``decision_id``."""

    id: str = Field(default_factory=_review_id)
    decision_id: Optional[str] = None
    review_date: Optional[datetime] = None
    outcome: Optional[Outcome] = None
    would_decide_again: Optional[bool] = None
    notes: str = ""
    learned_lesson: str = ""
    emotional_state: Optional[str] = None  # happy / neutral / regret
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("notes", "learned_lesson", mode="before")
    @classmethod
    def _null_to_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    def is_valid(self) -> bool:
        """A review may be persisted only with a decision, an outcome and a verdict."""
        return (
            bool(self.decision_id)
            and self.outcome is not None
            and self.would_decide_again is not None
        )
