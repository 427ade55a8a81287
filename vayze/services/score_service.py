"""
Vayze — Weighted Decision Score

Turns a questionnaire answer set into a 0–100 confidence percentage by
normalising every answered step to a 0–100 sub-score and taking the
weighted mean under the decision's preset:

  score = round( Σ subscore_i × w_i / Σ w_i )

Full mode (six steps):
  step1  intuition      gut / 10 × 100
  step2  risk           clamp((opportunities − risks + 5) / 10 × 100)
  step3  consequences   clamp((positive − negative + 5) / 10 × 100)
  step4  values         alignment / 10 × 100
  step5  external       externalOpinion / 10 × 100
  step6  head/heart     yes/yes 100, yes/no 60, no/yes 40, no/no 0, else 50

Quick mode (two inputs) uses fixed weights instead of the preset vector:
  quickGut      1.0   (1.5 for emotional / relationship presets)
  quickProCon   1.0   (0.8 for emotional / relationship presets)

Steps that are absent contribute to neither numerator nor denominator; with
nothing answered the score is the neutral 50.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog

from vayze.services.preset_service import PresetService
from vayze.utils.scoring import NEUTRAL_SCORE, clamp, round_half_up

logger = structlog.get_logger("vayze.score_service")

# ──────────────────────────────────────────────────────────────────────────────
# Constants
# ──────────────────────────────────────────────────────────────────────────────

_MIDPOINT_RATING: float = 5.0

_HEAD_HEART_SCORES: dict[tuple[str, str], float] = {
    ("yes", "yes"): 100.0,
    ("yes", "no"): 60.0,
    ("no", "yes"): 40.0,
    ("no", "no"): 0.0,
}

_EMOTIONAL_PRESETS: frozenset[str] = frozenset({"emotional", "relationship"})

YES_THRESHOLD: int = 60
NO_THRESHOLD: int = 40


# ──────────────────────────────────────────────────────────────────────────────
# Answer readers (shared with the explainer)
# ──────────────────────────────────────────────────────────────────────────────

def rating(group: Any, field: Optional[str] = None) -> float:
    """Read a 0–10 rating; a present group with no usable number counts as 5."""
    value = group.get(field) if field is not None and isinstance(group, Mapping) else group
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return _MIDPOINT_RATING
    return float(value)


def count(group: Any, field: str) -> int:
    """Length of a list-valued answer field; non-lists count as empty."""
    if not isinstance(group, Mapping):
        return 0
    items = group.get(field)
    return len(items) if isinstance(items, (list, tuple)) else 0


def balance_score(pro: int, con: int) -> float:
    return clamp((pro - con + 5) / 10 * 100)


def _present(answers: Mapping[str, Any], key: str) -> bool:
    return answers.get(key) is not None


class ScoreService:
    """Weighted scoring of full- and quick-mode answer sets."""

    # ── Public API ────────────────────────────────────────────────────────

    @classmethod
    def compute_score(
        cls,
        answers: Optional[Mapping[str, Any]],
        mode: str = "full",
        preset_key: Optional[str] = None,
    ) -> int:
        """Weighted 0–100 score for *answers* under *preset_key*."""
        answers = answers or {}
        if mode == "quick":
            parts = cls._quick_parts(answers, preset_key)
        else:
            parts = cls._full_parts(answers, preset_key)

        total_weight = sum(weight for _, weight in parts)
        if total_weight == 0:
            score = NEUTRAL_SCORE
        else:
            weighted_sum = sum(sub * weight for sub, weight in parts)
            score = round_half_up(clamp(weighted_sum / total_weight))

        logger.debug(
            "score_computed",
            mode=mode,
            preset=preset_key,
            score=score,
            steps_used=len(parts),
        )
        return score

    @staticmethod
    def recommendation_for(score: Optional[int]) -> str:
        """``yes`` at 60 or above, ``no`` at 40 or below, ``unclear`` between."""
        if score is None:
            return "unclear"
        if score >= YES_THRESHOLD:
            return "yes"
        if score <= NO_THRESHOLD:
            return "no"
        return "unclear"

    # ── Internal helpers ──────────────────────────────────────────────────

    @staticmethod
    def _full_parts(answers: Mapping[str, Any], preset_key: Optional[str]) -> list[tuple[float, float]]:
        weights = PresetService.get(preset_key).weights
        parts: list[tuple[float, float]] = []

        if _present(answers, "step1"):
            parts.append((rating(answers["step1"], "gut") / 10 * 100, weights.intuition))

        if _present(answers, "step2"):
            step = answers["step2"]
            parts.append((balance_score(count(step, "opportunities"), count(step, "risks")), weights.risk))

        if _present(answers, "step3"):
            step = answers["step3"]
            parts.append((
                balance_score(count(step, "positiveConsequences"), count(step, "negativeConsequences")),
                weights.consequences,
            ))

        if _present(answers, "step4"):
            parts.append((rating(answers["step4"], "alignment") / 10 * 100, weights.values))

        if _present(answers, "step5"):
            parts.append((rating(answers["step5"], "externalOpinion") / 10 * 100, weights.external))

        if _present(answers, "step6"):
            step = answers["step6"]
            head = step.get("headDecision") if isinstance(step, Mapping) else None
            heart = step.get("heartDecision") if isinstance(step, Mapping) else None
            parts.append((_HEAD_HEART_SCORES.get((head, heart), 50.0), weights.head_heart))

        return parts

    @staticmethod
    def _quick_parts(answers: Mapping[str, Any], preset_key: Optional[str]) -> list[tuple[float, float]]:
        emotional = preset_key in _EMOTIONAL_PRESETS
        parts: list[tuple[float, float]] = []

        if _present(answers, "quickGut"):
            parts.append((rating(answers["quickGut"]) / 10 * 100, 1.5 if emotional else 1.0))

        if _present(answers, "quickProCon"):
            step = answers["quickProCon"]
            parts.append((balance_score(count(step, "pros"), count(step, "cons")), 0.8 if emotional else 1.0))

        return parts
