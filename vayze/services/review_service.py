"""
Vayze — Review Scoring & Scheduling

A review is the user's reflection on a decision some days after making it.
Its success score is the plain sum of two halves:

  outcome             good 50 · neutral / unknown 25 · bad 0
  would decide again  yes 50 · unknown 25 · no 0

so a review with nothing filled in still scores 50.  Reviews are scheduled
``REVIEW_DELAY_DAYS`` after the decision and become due
``REVIEW_DUE_BUFFER_HOURS`` before that date.
"""

from __future__ import annotations

import statistics
from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping, Optional

import structlog

from vayze import texts
from vayze.config import get_settings
from vayze.schemas.decision import Decision
from vayze.schemas.review import Review
from vayze.utils.coerce import as_decisions, as_review, as_reviews
from vayze.utils.timeutil import as_utc, utcnow

logger = structlog.get_logger("vayze.review_service")

# ──────────────────────────────────────────────────────────────────────────────
# Constants
# ──────────────────────────────────────────────────────────────────────────────

_OUTCOME_POINTS: dict[Optional[str], int] = {"good": 50, "neutral": 25, "bad": 0, None: 25}
_AGAIN_POINTS: dict[Optional[bool], int] = {True: 50, False: 0, None: 25}

OUTCOMES: tuple[str, ...] = ("good", "neutral", "bad")


class ReviewService:
    """Success scoring and due-date logic for decision reviews."""

    def __init__(
        self,
        delay_days: Optional[int] = None,
        due_buffer_hours: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self.delay_days: int = delay_days if delay_days is not None else settings.REVIEW_DELAY_DAYS
        self.due_buffer_hours: int = (
            due_buffer_hours if due_buffer_hours is not None else settings.REVIEW_DUE_BUFFER_HOURS
        )

    # ── Scoring ───────────────────────────────────────────────────────────

    @staticmethod
    def success_score(review: Review | Mapping[str, Any]) -> int:
        review = as_review(review)
        return _OUTCOME_POINTS.get(review.outcome, 0) + _AGAIN_POINTS[review.would_decide_again]

    @classmethod
    def average_success_score(cls, reviews: Iterable[Review | Mapping[str, Any]] | None) -> float:
        """Mean success score; 0 for no reviews."""
        scores = [cls.success_score(r) for r in as_reviews(reviews)]
        if not scores:
            return 0.0
        return statistics.fmean(scores)

    # ── Scheduling ────────────────────────────────────────────────────────

    def review_due_date(self, decision_date: datetime) -> datetime:
        return as_utc(decision_date) + timedelta(days=self.delay_days)

    def is_due(self, due_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
        """True once *now* is within the buffer before *due_date* (or past it)."""
        if due_date is None:
            return False
        now = as_utc(now) if now is not None else utcnow()
        return now >= as_utc(due_date) - timedelta(hours=self.due_buffer_hours)

    @staticmethod
    def is_overdue(due_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
        if due_date is None:
            return False
        now = as_utc(now) if now is not None else utcnow()
        return now > as_utc(due_date)

    def find_due_reviews(
        self,
        decisions: Iterable[Decision | Mapping[str, Any]] | None,
        now: Optional[datetime] = None,
    ) -> list[Decision]:
        """Unreviewed decisions whose scheduled review is due."""
        now = as_utc(now) if now is not None else utcnow()
        due = [
            d for d in as_decisions(decisions)
            if d.review is None and self.is_due(d.review_scheduled_for, now)
        ]
        logger.info("due_reviews_found", count=len(due))
        return due

    # ── Presentation helpers ──────────────────────────────────────────────

    @staticmethod
    def group_by_outcome(reviews: Iterable[Review | Mapping[str, Any]] | None) -> dict[str, list[Review]]:
        grouped: dict[str, list[Review]] = {outcome: [] for outcome in OUTCOMES}
        for review in as_reviews(reviews):
            if review.outcome in grouped:
                grouped[review.outcome].append(review)
        return grouped

    @staticmethod
    def summarize(review: Review | Mapping[str, Any]) -> str:
        review = as_review(review)
        outcome = texts.REVIEW_OUTCOMES.get(review.outcome or "", texts.REVIEW_OUTCOME_OPEN)
        again = texts.REVIEW_AGAIN_YES if review.would_decide_again else texts.REVIEW_AGAIN_NO
        return texts.REVIEW_SUMMARY.format(outcome=outcome, again=again)
