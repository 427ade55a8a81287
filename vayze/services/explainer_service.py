"""
Vayze — Decision Explainer

Derives qualitative factors from the raw answers and renders a German
summary plus up to three meta-insights.  The explainer deliberately knows
nothing about weight presets: it re-derives emphasis from raw magnitudes
with its own thresholds, so the emphasis it reports may differ from the
weighted score it is asked to justify.

Factor strengths (value / 10 × constant):
  intuition     2   (5 in quick mode)
  values        4
  external      2
  list balances min(|balance| × 2, 10) × 0.4 / 0.3 / 0.5
  head & heart  6 on agreement, 3 on conflict
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog

from vayze import texts
from vayze.schemas.explanation import Explanation, ExplanationInsight, Factor, FactorBuckets
from vayze.services.score_service import count, rating
from vayze.utils.scoring import NEUTRAL_SCORE

logger = structlog.get_logger("vayze.explainer_service")

# ──────────────────────────────────────────────────────────────────────────────
# Constants
# ──────────────────────────────────────────────────────────────────────────────

_HIGH_RATING: float = 6.0     # strictly above → positive
_LOW_RATING: float = 4.0      # strictly below → negative

_DOMINANT_STRENGTH: float = 5.0
_MAX_INSIGHTS: int = 3
_SUMMARY_TOP_N: int = 3


def _factor(factor_id: str, strength: float, **values: Any) -> Factor:
    label, description, icon = texts.FACTORS[factor_id]
    return Factor(
        label=label,
        description=description.format(**values),
        strength=strength,
        icon=icon,
    )


class ExplainerService:
    """Qualitative explanation of a scored decision."""

    # ── Public API ────────────────────────────────────────────────────────

    @classmethod
    def explain(
        cls,
        answers: Optional[Mapping[str, Any]],
        mode: str = "full",
        final_score: Optional[float] = None,
        recommendation: Optional[str] = None,
    ) -> Explanation:
        """Build the explanation for one decision.

        Read-only: neither *answers* nor the caller's decision are touched.
        """
        answers = answers or {}
        score = NEUTRAL_SCORE if final_score is None else final_score

        buckets = cls.analyze_factors(answers, mode)
        explanation = Explanation(
            summary=cls._summary(buckets, recommendation),
            factors=buckets,
            insights=cls._insights(buckets, score),
            confidence=score,
        )
        logger.debug(
            "explanation_built",
            mode=mode,
            positive=len(buckets.positive),
            negative=len(buckets.negative),
            neutral=len(buckets.neutral),
            insights=len(explanation.insights),
        )
        return explanation

    @staticmethod
    def short_summary(explanation: Optional[Explanation | Mapping[str, Any]]) -> str:
        """First line of the summary, for list views."""
        if explanation is None:
            return texts.SHORT_SUMMARY_MISSING
        if not isinstance(explanation, Explanation):
            explanation = Explanation.model_validate(explanation)
        first_line = explanation.summary.split("\n", 1)[0]
        return first_line or texts.SHORT_SUMMARY_FALLBACK

    # ── Factor analysis ───────────────────────────────────────────────────

    @classmethod
    def analyze_factors(cls, answers: Mapping[str, Any], mode: str = "full") -> FactorBuckets:
        factors = cls._quick_factors(answers) if mode == "quick" else cls._full_factors(answers)

        positive = [f for kind, f in factors if kind == "positive"]
        negative = [f for kind, f in factors if kind == "negative"]
        neutral = [f for kind, f in factors if kind == "neutral"]
        for bucket in (positive, negative, neutral):
            bucket.sort(key=lambda f: f.strength, reverse=True)

        return FactorBuckets(positive=positive, negative=negative, neutral=neutral)

    @staticmethod
    def _rating_factor(
        value: float,
        weight: float,
        positive_id: str,
        negative_id: str,
        neutral: Optional[tuple[str, float]] = None,
    ) -> Optional[tuple[str, Factor]]:
        if value > _HIGH_RATING:
            return "positive", _factor(positive_id, value / 10 * weight)
        if value < _LOW_RATING:
            return "negative", _factor(negative_id, (10 - value) / 10 * weight)
        if neutral is not None:
            neutral_id, strength = neutral
            return "neutral", _factor(neutral_id, strength)
        return None

    @staticmethod
    def _balance_factor(
        pro: int,
        con: int,
        scale: float,
        positive_id: str,
        negative_id: str,
        neutral_id: Optional[str] = None,
    ) -> Optional[tuple[str, Factor]]:
        balance = pro - con
        strength = min(abs(balance) * 2, 10) * scale
        if balance > 0:
            return "positive", _factor(positive_id, strength, pro=pro, con=con)
        if balance < 0:
            return "negative", _factor(negative_id, strength, pro=pro, con=con)
        if neutral_id is not None and pro > 0:
            return "neutral", _factor(neutral_id, 2.0, pro=pro, con=con)
        return None

    @classmethod
    def _full_factors(cls, answers: Mapping[str, Any]) -> list[tuple[str, Factor]]:
        found: list[Optional[tuple[str, Factor]]] = []

        if answers.get("step1") is not None:
            found.append(cls._rating_factor(
                rating(answers["step1"], "gut"), 2, "gut_positive", "gut_negative",
                neutral=("gut_neutral", 1.0),
            ))

        if answers.get("step2") is not None:
            step = answers["step2"]
            found.append(cls._balance_factor(
                count(step, "opportunities"), count(step, "risks"), 0.4,
                "opportunities_outweigh", "risks_outweigh", "risks_balanced",
            ))

        if answers.get("step3") is not None:
            step = answers["step3"]
            found.append(cls._balance_factor(
                count(step, "positiveConsequences"), count(step, "negativeConsequences"), 0.3,
                "consequences_positive", "consequences_negative",
            ))

        if answers.get("step4") is not None:
            found.append(cls._rating_factor(
                rating(answers["step4"], "alignment"), 4, "values_aligned", "values_conflict",
            ))

        if answers.get("step5") is not None:
            found.append(cls._rating_factor(
                rating(answers["step5"], "externalOpinion"), 2, "external_positive", "external_negative",
            ))

        if answers.get("step6") is not None:
            step = answers["step6"]
            head = step.get("headDecision") if isinstance(step, Mapping) else None
            heart = step.get("heartDecision") if isinstance(step, Mapping) else None
            if head == "yes" and heart == "yes":
                found.append(("positive", _factor("head_heart_yes", 6.0)))
            elif head == "no" and heart == "no":
                found.append(("negative", _factor("head_heart_no", 6.0)))
            elif head == "yes":
                found.append(("neutral", _factor("head_heart_conflict_head", 3.0)))
            else:
                found.append(("neutral", _factor("head_heart_conflict_heart", 3.0)))

        return [f for f in found if f is not None]

    @classmethod
    def _quick_factors(cls, answers: Mapping[str, Any]) -> list[tuple[str, Factor]]:
        found: list[Optional[tuple[str, Factor]]] = []

        if answers.get("quickGut") is not None:
            found.append(cls._rating_factor(
                rating(answers["quickGut"]), 5, "gut_positive", "gut_negative",
                neutral=("gut_neutral", 2.0),
            ))

        if answers.get("quickProCon") is not None:
            step = answers["quickProCon"]
            found.append(cls._balance_factor(
                count(step, "pros"), count(step, "cons"), 0.5,
                "pros_outweigh", "cons_outweigh", "pros_balanced",
            ))

        return [f for f in found if f is not None]

    # ── Rendering ─────────────────────────────────────────────────────────

    @staticmethod
    def _summary(buckets: FactorBuckets, recommendation: Optional[str]) -> str:
        if recommendation in ("yes", "no"):
            if recommendation == "yes":
                header, leading, opposing, caveat = (
                    texts.SUMMARY_YES_HEADER, buckets.positive, buckets.negative, texts.SUMMARY_YES_CAVEAT,
                )
            else:
                header, leading, opposing, caveat = (
                    texts.SUMMARY_NO_HEADER, buckets.negative, buckets.positive, texts.SUMMARY_NO_CAVEAT,
                )
            summary = header
            for factor in leading[:_SUMMARY_TOP_N]:
                summary += texts.SUMMARY_FACTOR_LINE.format(
                    icon=factor.icon, label=factor.label, description=factor.description,
                )
            if opposing:
                summary += caveat.format(description=opposing[0].description)
            return summary

        summary = texts.SUMMARY_UNCLEAR_HEADER
        summary += texts.SUMMARY_UNCLEAR_COUNTS.format(
            pro=len(buckets.positive), con=len(buckets.negative),
        )
        if buckets.neutral:
            strongest = buckets.neutral[0]
            summary += texts.SUMMARY_UNCLEAR_NEUTRAL.format(
                icon=strongest.icon, description=strongest.description,
            )
        summary += texts.SUMMARY_UNCLEAR_ADVICE
        return summary

    @staticmethod
    def _insights(buckets: FactorBuckets, score: float) -> list[ExplanationInsight]:
        insights: list[ExplanationInsight] = []

        def add(kind: str, template_id: str) -> None:
            icon, text, detail = texts.EXPLANATION_INSIGHTS[template_id]
            insights.append(ExplanationInsight(type=kind, icon=icon, text=text, detail=detail))

        if score >= 70:
            add("clarity", "clarity_yes")
        elif score <= 30:
            add("clarity", "clarity_no")
        elif 45 <= score <= 55:
            add("uncertainty", "uncertainty")

        if any(texts.CONFLICT_MARKER in f.label for f in buckets.neutral):
            add("conflict", "conflict")

        if buckets.positive and buckets.positive[0].strength >= _DOMINANT_STRENGTH:
            top = buckets.positive[0]
            insights.append(ExplanationInsight(
                type="dominant", icon=top.icon,
                text=texts.DOMINANT_POSITIVE.format(label=top.label), detail=top.description,
            ))
        elif buckets.negative and buckets.negative[0].strength >= _DOMINANT_STRENGTH:
            top = buckets.negative[0]
            insights.append(ExplanationInsight(
                type="dominant", icon=top.icon,
                text=texts.DOMINANT_NEGATIVE.format(label=top.label), detail=top.description,
            ))

        return insights[:_MAX_INSIGHTS]
