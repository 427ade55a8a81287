"""
Vayze — Decision Profile Pipeline

Builds the behavioural profile from the full decision and review history:
  1. Aggregate nine metrics (confidence, mode/yes balance, categories,
     review success, preferred preset, consistency, decision time, trend)
  2. Classify the user into an archetype (first matching rule wins)
  3. Collect strengths (max 4) and growth areas (max 3)
  4. Derive recommendations from the archetype and the metrics

The archetype, strength, growth-area and recommendation rules are ordered
``(predicate, result)`` tables evaluated over the rounded metrics.  They
are class attributes so tests can introspect the exact ordering.
"""

from __future__ import annotations

import statistics
from collections import Counter
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional

import structlog

from vayze import texts
from vayze.schemas.decision import Decision
from vayze.schemas.profile import (
    Archetype,
    DecisionProfile,
    GrowthArea,
    ProfileMetrics,
    Recommendation,
    Strength,
)
from vayze.schemas.review import Review
from vayze.services.review_service import ReviewService
from vayze.utils.coerce import as_decisions, as_reviews
from vayze.utils.scoring import clarity, consistency, mean_score, round_half_up, split_halves
from vayze.utils.timeutil import minutes_between, utcnow

logger = structlog.get_logger("vayze.profile_service")

Rule = Callable[[ProfileMetrics], bool]


class DecisionProfileService:
    """Derives metrics, archetype and advice from a decision history."""

    # ── Constants ─────────────────────────────────────────────────────────

    MIN_DECISIONS_FOR_TREND: int = 5
    CLARITY_TREND_THRESHOLD: float = 10.0
    MAX_STRENGTHS: int = 4
    MAX_GROWTH_AREAS: int = 3
    FALLBACK_ARCHETYPE: str = "balanced_thinker"

    # Evaluated top-down; the first predicate that holds picks the archetype.
    ARCHETYPE_RULES: list[tuple[Rule, str]] = [
        (
            lambda m: m.avg_confidence >= 70 and m.avg_success_score >= 70 and m.consistency >= 70,
            "confident_decider",
        ),
        (
            lambda m: m.avg_confidence < 60 and m.mode_preference < 30 and m.decision_balance < 40,
            "cautious_analyst",
        ),
        (
            lambda m: m.mode_preference >= 70 and m.avg_confidence >= 60 and m.decision_balance >= 60,
            "intuitive_doer",
        ),
        (
            lambda m: m.clarity_trend == "improving" and m.total_decisions >= 5,
            "growing_learner",
        ),
        (
            lambda m: 50 <= m.avg_confidence <= 70 and abs(m.decision_balance - 50) <= 20,
            "balanced_thinker",
        ),
        (
            lambda m: m.avg_confidence < 50 and m.consistency < 50,
            "searcher",
        ),
    ]

    STRENGTH_RULES: list[tuple[Rule, str]] = [
        (lambda m: m.avg_confidence >= 70, "high_clarity"),
        (lambda m: m.avg_success_score >= 70, "high_success"),
        (lambda m: m.consistency >= 70, "consistency"),
        (lambda m: m.clarity_trend == "improving", "growth"),
        (lambda m: m.mode_preference >= 70, "speed"),
        (lambda m: m.total_reviews / m.total_decisions >= 0.5, "reflection"),
    ]

    GROWTH_AREA_RULES: list[tuple[Rule, str]] = [
        (lambda m: m.avg_confidence < 50, "clarity"),
        (lambda m: m.avg_success_score < 50 and m.total_reviews >= 3, "quality"),
        (lambda m: m.consistency < 40, "consistency"),
        (lambda m: m.clarity_trend == "declining", "declining_clarity"),
        (lambda m: m.total_reviews == 0 and m.total_decisions >= 5, "missing_reflection"),
        (lambda m: m.decision_balance >= 80 or m.decision_balance <= 20, "one_sided"),
    ]

    ARCHETYPE_RECOMMENDATIONS: dict[str, str] = {
        "confident_decider": "low",
        "cautious_analyst": "medium",
        "intuitive_doer": "high",
        "searcher": "high",
    }

    METRIC_RECOMMENDATIONS: list[tuple[Rule, str, str]] = [
        (lambda m: m.total_reviews == 0, "no_reviews", "high"),
        (lambda m: m.avg_confidence < 60, "low_confidence", "medium"),
    ]

    # ══════════════════════════════════════════════════════════════════════
    # build — full pipeline entry point
    # ══════════════════════════════════════════════════════════════════════

    @classmethod
    def build(
        cls,
        decisions: Iterable[Decision | Mapping[str, Any]] | None,
        reviews: Iterable[Review | Mapping[str, Any]] | None = None,
        now: Optional[datetime] = None,
    ) -> DecisionProfile:
        """Compute the full profile.

        With no decisions the metrics are zeroed and the archetype, strengths,
        growth areas and recommendations are empty.
        """
        decisions = as_decisions(decisions)
        reviews = as_reviews(reviews)
        generated_at = now or utcnow()

        metrics = cls.calculate_metrics(decisions, reviews)
        if metrics.total_decisions == 0:
            logger.info("profile_empty")
            return DecisionProfile(metrics=metrics, generated_at=generated_at)

        archetype = cls.determine_archetype(metrics)
        profile = DecisionProfile(
            metrics=metrics,
            archetype=archetype,
            strengths=cls.identify_strengths(metrics),
            growth_areas=cls.identify_growth_areas(metrics),
            recommendations=cls.generate_recommendations(archetype, metrics),
            generated_at=generated_at,
        )
        logger.info(
            "archetype_selected",
            archetype=archetype.id,
            total_decisions=metrics.total_decisions,
            total_reviews=metrics.total_reviews,
            strengths=len(profile.strengths),
            growth_areas=len(profile.growth_areas),
        )
        return profile

    # ── Step 1: metrics ───────────────────────────────────────────────────

    @classmethod
    def calculate_metrics(cls, decisions: list[Decision], reviews: list[Review]) -> ProfileMetrics:
        total = len(decisions)
        if total == 0:
            return ProfileMetrics()

        quick_count = sum(1 for d in decisions if d.mode == "quick")
        yes_count = sum(1 for d in decisions if d.recommendation == "yes")
        categories = Counter(d.category or "other" for d in decisions)
        presets = Counter(d.weight_preset or "balanced" for d in decisions)

        return ProfileMetrics(
            avg_confidence=round_half_up(mean_score(decisions)),
            mode_preference=round_half_up(quick_count / total * 100),
            decision_balance=round_half_up(yes_count / total * 100),
            category_distribution=dict(categories),
            avg_success_score=round_half_up(ReviewService.average_success_score(reviews)),
            preset_preference=presets.most_common(1)[0][0],
            consistency=round_half_up(consistency(decisions)),
            avg_decision_time_minutes=round_half_up(cls._average_decision_minutes(decisions)),
            clarity_trend=cls._clarity_trend(decisions),
            total_decisions=total,
            total_reviews=len(reviews),
        )

    @staticmethod
    def _average_decision_minutes(decisions: list[Decision]) -> float:
        durations = [
            minutes_between(d.created_at, d.completed_at)
            for d in decisions
            if d.created_at is not None and d.completed_at is not None
        ]
        if not durations:
            return 0.0
        return statistics.fmean(durations)

    @classmethod
    def _clarity_trend(cls, decisions: list[Decision]) -> str:
        if len(decisions) < cls.MIN_DECISIONS_FOR_TREND:
            return "neutral"
        older, newer = split_halves(decisions)
        difference = clarity(newer) - clarity(older)
        if difference > cls.CLARITY_TREND_THRESHOLD:
            return "improving"
        if difference < -cls.CLARITY_TREND_THRESHOLD:
            return "declining"
        return "stable"

    # ── Step 2: archetype ─────────────────────────────────────────────────

    @classmethod
    def determine_archetype(cls, metrics: ProfileMetrics) -> Archetype:
        archetype_id = next(
            (key for rule, key in cls.ARCHETYPE_RULES if rule(metrics)),
            cls.FALLBACK_ARCHETYPE,
        )
        return Archetype(id=archetype_id, **texts.ARCHETYPES[archetype_id])

    # ── Step 3: strengths & growth areas ──────────────────────────────────

    @classmethod
    def identify_strengths(cls, metrics: ProfileMetrics) -> list[Strength]:
        if metrics.total_decisions == 0:
            return []
        strengths = []
        for rule, key in cls.STRENGTH_RULES:
            if rule(metrics):
                icon, title, description = texts.STRENGTHS[key]
                strengths.append(Strength(
                    icon=icon,
                    title=title,
                    description=description.format(**metrics.model_dump()),
                ))
        return strengths[: cls.MAX_STRENGTHS]

    @classmethod
    def identify_growth_areas(cls, metrics: ProfileMetrics) -> list[GrowthArea]:
        tendency = "JA" if metrics.decision_balance >= 80 else "NEIN"
        areas = []
        for rule, key in cls.GROWTH_AREA_RULES:
            if rule(metrics):
                icon, title, description = texts.GROWTH_AREAS[key]
                areas.append(GrowthArea(
                    icon=icon,
                    title=title,
                    description=description.format(tendency=tendency),
                ))
        return areas[: cls.MAX_GROWTH_AREAS]

    # ── Step 4: recommendations ───────────────────────────────────────────

    @classmethod
    def generate_recommendations(
        cls,
        archetype: Optional[Archetype],
        metrics: ProfileMetrics,
    ) -> list[Recommendation]:
        recommendations: list[Recommendation] = []

        if archetype is not None and archetype.id in cls.ARCHETYPE_RECOMMENDATIONS:
            recommendations.append(Recommendation(
                text=texts.RECOMMENDATIONS[archetype.id],
                priority=cls.ARCHETYPE_RECOMMENDATIONS[archetype.id],
            ))

        for rule, key, priority in cls.METRIC_RECOMMENDATIONS:
            if rule(metrics):
                recommendations.append(Recommendation(text=texts.RECOMMENDATIONS[key], priority=priority))

        return recommendations
