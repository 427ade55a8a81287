"""
Vayze — Decision Confidence Score

A longitudinal 0–100 score answering "how good is this user at deciding?",
recomputed from the full decision and review history on every call.

  score = 0.30 × clarity + 0.40 × success + 0.20 × consistency + 0.10 × growth

  clarity      mean distance of final scores from 50, × 2
  success      mean review success score; 0.7 × clarity when no reviews exist
  consistency  100 − 2σ of final scores (50 below three decisions)
  growth       50 + 2.5 × (clarity of newer half − clarity of older half),
               clamped; 50 below five decisions

The trend compares the score over the last ``TREND_WINDOW_DAYS`` with the
score over the window before it, each recomputed on its own subset of
decisions and the reviews belonging to them.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping, Optional

import structlog

from vayze import texts
from vayze.config import get_settings
from vayze.schemas.confidence import ConfidenceFactors, ConfidenceScoreResult
from vayze.schemas.decision import Decision
from vayze.schemas.review import Review
from vayze.services.review_service import ReviewService
from vayze.utils.coerce import as_decisions, as_reviews
from vayze.utils.scoring import clamp, clarity, consistency, round_half_up, split_halves
from vayze.utils.timeutil import as_utc, utcnow

logger = structlog.get_logger("vayze.confidence_service")

# ──────────────────────────────────────────────────────────────────────────────
# Constants
# ──────────────────────────────────────────────────────────────────────────────

FACTOR_WEIGHTS: dict[str, float] = {
    "clarity": 0.30,
    "success": 0.40,
    "consistency": 0.20,
    "growth": 0.10,
}

_SUCCESS_PROXY_RATIO: float = 0.7
_MIN_DECISIONS_FOR_GROWTH: int = 5
_MIN_DECISIONS_FOR_TREND: int = 5
_TREND_THRESHOLD: int = 5
_WEAK_FACTOR: float = 60.0
_STRONG_FACTOR: float = 80.0
_MAX_INSIGHTS: int = 3


class ConfidenceService:
    """Aggregate confidence score over a user's decision history."""

    def __init__(self, trend_window_days: Optional[int] = None) -> None:
        settings = get_settings()
        self.trend_window_days: int = (
            trend_window_days if trend_window_days is not None else settings.TREND_WINDOW_DAYS
        )

    # ── Public API ────────────────────────────────────────────────────────

    def compute_aggregate(
        self,
        decisions: Iterable[Decision | Mapping[str, Any]] | None,
        reviews: Iterable[Review | Mapping[str, Any]] | None = None,
        now: Optional[datetime] = None,
    ) -> ConfidenceScoreResult:
        """Compute the confidence score, trend, factors and insights."""
        decisions = as_decisions(decisions)
        reviews = as_reviews(reviews)
        now = as_utc(now) if now is not None else utcnow()

        result = self._aggregate(decisions, reviews, now)
        logger.info(
            "aggregate_computed",
            decisions=len(decisions),
            reviews=len(reviews),
            score=result.score,
            trend=result.trend,
        )
        return result

    @staticmethod
    def score_message(score: float) -> str:
        for lower_bound, message in texts.SCORE_MESSAGES:
            if score >= lower_bound:
                return message
        return texts.SCORE_MESSAGES[-1][1]

    @staticmethod
    def factor_explanations() -> dict[str, dict[str, str]]:
        return {key: dict(entry) for key, entry in texts.FACTOR_EXPLANATIONS.items()}

    # ── Internal helpers ──────────────────────────────────────────────────

    def _aggregate(
        self,
        decisions: list[Decision],
        reviews: list[Review],
        now: datetime,
    ) -> ConfidenceScoreResult:
        if not decisions:
            return ConfidenceScoreResult(
                score=0,
                trend="neutral",
                factors=ConfidenceFactors(),
                insights=[texts.CONFIDENCE_EMPTY_INSIGHT],
                message=texts.CONFIDENCE_EMPTY_MESSAGE,
            )

        factors = {
            "clarity": clarity(decisions),
            "success": self._success(decisions, reviews),
            "consistency": consistency(decisions),
            "growth": self._growth(decisions),
        }
        raw_score = sum(factors[key] * weight for key, weight in FACTOR_WEIGHTS.items())
        score = round_half_up(clamp(raw_score))
        trend = self._trend(decisions, reviews, now)

        return ConfidenceScoreResult(
            score=score,
            trend=trend,
            factors=ConfidenceFactors(**{key: round_half_up(value) for key, value in factors.items()}),
            insights=self._insights(score, factors, trend),
            message=self.score_message(score),
        )

    @staticmethod
    def _success(decisions: list[Decision], reviews: list[Review]) -> float:
        if reviews:
            return ReviewService.average_success_score(reviews)
        return clarity(decisions) * _SUCCESS_PROXY_RATIO

    @staticmethod
    def _growth(decisions: list[Decision]) -> float:
        if len(decisions) < _MIN_DECISIONS_FOR_GROWTH:
            return 50.0
        older, newer = split_halves(decisions)
        return clamp(50 + (clarity(newer) - clarity(older)) * 2.5)

    def _trend(self, decisions: list[Decision], reviews: list[Review], now: datetime) -> str:
        if len(decisions) < _MIN_DECISIONS_FOR_TREND:
            return "neutral"

        window = timedelta(days=self.trend_window_days)
        recent_start = now - window
        previous_start = now - 2 * window

        recent: list[Decision] = []
        previous: list[Decision] = []
        for decision in decisions:
            created = as_utc(decision.created_at)
            if created is None:
                continue
            if created >= recent_start:
                recent.append(decision)
            elif created >= previous_start:
                previous.append(decision)

        if not recent or not previous:
            return "neutral"

        recent_score = self._aggregate(recent, self._reviews_of(recent, reviews), now).score
        previous_score = self._aggregate(previous, self._reviews_of(previous, reviews), now).score
        difference = recent_score - previous_score

        logger.debug(
            "confidence_trend",
            recent=len(recent),
            previous=len(previous),
            recent_score=recent_score,
            previous_score=previous_score,
        )
        if difference > _TREND_THRESHOLD:
            return "improving"
        if difference < -_TREND_THRESHOLD:
            return "declining"
        return "stable"

    @staticmethod
    def _reviews_of(decisions: list[Decision], reviews: list[Review]) -> list[Review]:
        ids = {d.id for d in decisions}
        return [r for r in reviews if r.decision_id in ids]

    @staticmethod
    def _insights(score: int, factors: dict[str, float], trend: str) -> list[str]:
        insights: list[str] = []

        for lower_bound, text in texts.CONFIDENCE_BANDS:
            if score >= lower_bound:
                insights.append(text)
                break

        if trend in texts.CONFIDENCE_TRENDS:
            insights.append(texts.CONFIDENCE_TRENDS[trend])

        # Ties resolve to the first factor in clarity/success/consistency/growth order.
        weakest = min(factors, key=factors.__getitem__)
        if factors[weakest] < _WEAK_FACTOR:
            insights.append(texts.CONFIDENCE_WEAKEST[weakest])

        strongest = max(factors, key=factors.__getitem__)
        if factors[strongest] >= _STRONG_FACTOR:
            insights.append(texts.CONFIDENCE_STRONGEST[strongest])

        return insights[:_MAX_INSIGHTS]
