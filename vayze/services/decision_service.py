"""
Vayze — Decision Lifecycle

A decision is started with its free-text description, accumulates answers
step by step, is scored and finalised exactly once, and may later receive a
single review.  Every operation returns a new ``Decision``; inputs are never
mutated, so a host can keep its own copies as the source of truth.

Lifecycle violations (changing a completed decision, finalising twice,
reviewing twice, attaching an invalid review) raise ``ValueError``; looking
up an id that is not in the supplied collection raises ``LookupError``.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

import structlog

from vayze.schemas.decision import Decision, DecisionStatistics
from vayze.schemas.review import Review
from vayze.services.explainer_service import ExplainerService
from vayze.services.preset_service import PresetService
from vayze.services.review_service import ReviewService
from vayze.services.score_service import ScoreService
from vayze.utils.coerce import as_decision, as_decisions, as_review, as_reviews
from vayze.utils.scoring import mean_score, round_half_up
from vayze.utils.timeutil import utcnow

logger = structlog.get_logger("vayze.decision_service")


def _decision_id() -> str:
    return f"decision_{uuid.uuid4().hex}"


class DecisionService:
    """Pure lifecycle operations over ``Decision`` records.

    The review service is injected so review timing can be configured
    independently of the environment (tests pass explicit values).
    """

    def __init__(self, review_service: Optional[ReviewService] = None) -> None:
        self.review_service = review_service or ReviewService()

    # ── Creation & answers ────────────────────────────────────────────────

    def start_decision(
        self,
        text: str,
        category: str = "other",
        mode: str = "full",
        weight_preset: Optional[str] = None,
        user_id: Optional[str] = None,
        decision_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Decision:
        """Create an in-progress decision.

        Without an explicit preset the keyword recommender picks one from
        *text*; an unknown explicit preset is stored as ``balanced``.
        """
        if weight_preset is None:
            preset = PresetService.recommend(text)
        else:
            preset = PresetService.get(weight_preset).key

        decision = Decision(
            id=decision_id or _decision_id(),
            user_id=user_id,
            decision=text,
            category=category or "other",
            mode=mode,
            weight_preset=preset,
            created_at=now or utcnow(),
        )
        logger.info("decision_started", decision_id=decision.id, mode=mode, preset=preset)
        return decision

    def update_answers(self, decision: Decision | Mapping[str, Any], step_key: str, answer: Any) -> Decision:
        decision = as_decision(decision)
        self._ensure_open(decision, "update answers of")
        answers = {**decision.answers, step_key: answer}
        return decision.model_copy(update={"answers": answers})

    def set_weight_preset(self, decision: Decision | Mapping[str, Any], preset_key: Optional[str]) -> Decision:
        decision = as_decision(decision)
        self._ensure_open(decision, "change the preset of")
        return decision.model_copy(update={"weight_preset": PresetService.get(preset_key).key})

    # ── Scoring & completion ──────────────────────────────────────────────

    def calculate_recommendation(self, decision: Decision | Mapping[str, Any]) -> Decision:
        """Score and explain the current answers without finalising."""
        decision = as_decision(decision)
        self._ensure_open(decision, "recalculate")

        score = ScoreService.compute_score(decision.answers, decision.mode, decision.weight_preset)
        recommendation = ScoreService.recommendation_for(score)
        explanation = ExplainerService.explain(decision.answers, decision.mode, score, recommendation)

        logger.info(
            "recommendation_calculated",
            decision_id=decision.id,
            score=score,
            recommendation=recommendation,
        )
        return decision.model_copy(update={
            "final_score": score,
            "recommendation": recommendation,
            "explanation": explanation,
        })

    def complete_decision(self, decision: Decision | Mapping[str, Any], now: Optional[datetime] = None) -> Decision:
        """Finalise a decision and schedule its review."""
        decision = as_decision(decision)
        self._ensure_open(decision, "complete")

        if decision.final_score is None or decision.recommendation is None or decision.explanation is None:
            decision = self.calculate_recommendation(decision)

        completed_at = now or utcnow()
        created_at = decision.created_at or completed_at
        completed = decision.model_copy(update={
            "created_at": created_at,
            "completed_at": completed_at,
            "review_scheduled_for": self.review_service.review_due_date(created_at),
        })
        logger.info(
            "decision_completed",
            decision_id=completed.id,
            score=completed.final_score,
            recommendation=completed.recommendation,
            review_scheduled_for=completed.review_scheduled_for.isoformat(),
        )
        return completed

    # ── Reviews ───────────────────────────────────────────────────────────

    def attach_review(
        self,
        decision: Decision | Mapping[str, Any],
        review: Review | Mapping[str, Any],
        now: Optional[datetime] = None,
    ) -> Decision:
        """Attach the single review a decision may have."""
        decision = as_decision(decision)
        review = as_review(review)
        log = logger.bind(decision_id=decision.id)

        if decision.review is not None:
            raise ValueError(f"Decision {decision.id} already has a review")
        if review.decision_id is None:
            review = review.model_copy(update={"decision_id": decision.id})
        if review.decision_id != decision.id:
            raise ValueError(
                f"Review belongs to decision {review.decision_id}, not {decision.id}"
            )
        if not review.is_valid():
            raise ValueError("Review needs an outcome and a would-decide-again answer")

        timestamp = now or utcnow()
        review = review.model_copy(update={
            "review_date": review.review_date or timestamp,
            "created_at": review.created_at or timestamp,
            "updated_at": review.updated_at or timestamp,
        })
        log.info(
            "review_attached",
            outcome=review.outcome,
            success_score=ReviewService.success_score(review),
        )
        return decision.model_copy(update={"review": review, "review_reminded": True})

    @staticmethod
    def mark_reminded(decision: Decision | Mapping[str, Any]) -> Decision:
        return as_decision(decision).model_copy(update={"review_reminded": True})

    @staticmethod
    def reviews_for(decision_id: str, reviews: Iterable[Review | Mapping[str, Any]] | None) -> list[Review]:
        return [r for r in as_reviews(reviews) if r.decision_id == decision_id]

    # ── Collections ───────────────────────────────────────────────────────

    @staticmethod
    def find_decision(decision_id: str, decisions: Iterable[Decision | Mapping[str, Any]] | None) -> Decision:
        for decision in as_decisions(decisions):
            if decision.id == decision_id:
                return decision
        raise LookupError(f"Decision {decision_id} not found")

    def delete_decision(
        self,
        decision_id: str,
        decisions: Iterable[Decision | Mapping[str, Any]] | None,
        reviews: Iterable[Review | Mapping[str, Any]] | None = None,
    ) -> tuple[list[Decision], list[Review]]:
        """Return both collections without the decision and its reviews."""
        decisions = as_decisions(decisions)
        reviews = as_reviews(reviews)
        self.find_decision(decision_id, decisions)

        remaining = [d for d in decisions if d.id != decision_id]
        kept_reviews = [r for r in reviews if r.decision_id != decision_id]
        logger.info(
            "decision_deleted",
            decision_id=decision_id,
            reviews_removed=len(reviews) - len(kept_reviews),
        )
        return remaining, kept_reviews

    @staticmethod
    def statistics(
        decisions: Iterable[Decision | Mapping[str, Any]] | None,
        reviews: Iterable[Review | Mapping[str, Any]] | None = None,
    ) -> DecisionStatistics:
        decisions = as_decisions(decisions)
        reviews = as_reviews(reviews)
        total = len(decisions)

        def count(attr: str, value: str) -> int:
            return sum(1 for d in decisions if getattr(d, attr) == value)

        return DecisionStatistics(
            total_decisions=total,
            total_reviews=len(reviews),
            yes_count=count("recommendation", "yes"),
            no_count=count("recommendation", "no"),
            unclear_count=count("recommendation", "unclear"),
            quick_count=count("mode", "quick"),
            full_count=count("mode", "full"),
            avg_confidence=round_half_up(mean_score(decisions)),
            review_rate=len(reviews) / total * 100 if total else 0.0,
        )

    # ── Internal helpers ──────────────────────────────────────────────────

    @staticmethod
    def _ensure_open(decision: Decision, action: str) -> None:
        if decision.is_completed:
            raise ValueError(f"Cannot {action} completed decision {decision.id}")
