"""
Vayze — Insight Engine

Short behavioural-pattern insights over the decision history.  Five
detectors each propose at most one candidate; the three with the highest
importance are returned.

  detector           needs                       fires at             importance
  mode preference    ≥ 3 decisions               ≥ 80 % / ≤ 20 % quick     7
  confidence trend   ≥ 5 decisions               halves differ > 10        9
  category focus     ≥ 5 decisions               top category ≥ 40 %       6
  yes/no balance     ≥ 5 decisions               ≥ 75 % / ≤ 25 % yes       5
  decision speed     ≥ 3 timed decisions         < 2 min / > 10 min        4

Per-decision insights compare a scored decision with similar past ones (same
category or same preset) and name a non-default preset.
"""

from __future__ import annotations

import statistics
from collections import Counter
from typing import Any, Callable, Iterable, Mapping, Optional

import structlog

from vayze import texts
from vayze.schemas.decision import Decision
from vayze.schemas.explanation import ExplanationInsight
from vayze.schemas.insight import Insight
from vayze.services.score_service import rating
from vayze.utils.coerce import as_decision, as_decisions
from vayze.utils.scoring import mean_score, round_half_up, split_halves
from vayze.utils.timeutil import minutes_between

logger = structlog.get_logger("vayze.insight_service")


def _insight(kind: str, template: tuple[str, str, str], importance: int, **values: Any) -> Insight:
    icon, text, detail = template
    return Insight(
        type=kind,
        icon=icon,
        text=text.format(**values),
        detail=detail.format(**values),
        importance=importance,
    )


def _fmt_rating(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class InsightService:
    """Pattern detection over a user's decisions."""

    # ── Constants ─────────────────────────────────────────────────────────

    MAX_USER_INSIGHTS: int = 3
    MAX_DECISION_INSIGHTS: int = 2

    MIN_DECISIONS_FOR_MODE: int = 3
    MIN_DECISIONS_FOR_PATTERNS: int = 5
    MIN_TIMED_DECISIONS: int = 3
    MIN_QUICK_HISTORY: int = 3

    SIMILAR_DEVIATION: float = 20.0
    TREND_THRESHOLD: float = 10.0
    GUT_DEVIATION: float = 2.0

    # ── Public API ────────────────────────────────────────────────────────

    @classmethod
    def user_insights(cls, decisions: Iterable[Decision | Mapping[str, Any]] | None) -> list[Insight]:
        """Top three pattern insights, most important first."""
        decisions = as_decisions(decisions)
        if not decisions:
            return []

        detectors: list[Callable[[list[Decision]], Optional[Insight]]] = [
            cls._mode_preference,
            cls._confidence_trend,
            cls._category_focus,
            cls._decision_balance,
            cls._decision_speed,
        ]
        candidates = [detect(decisions) for detect in detectors]
        candidates = [c for c in candidates if c is not None]
        candidates.sort(key=lambda i: i.importance, reverse=True)

        selected = candidates[: cls.MAX_USER_INSIGHTS]
        logger.info(
            "user_insights_generated",
            decisions=len(decisions),
            candidates=len(candidates),
            selected=[i.type for i in selected],
        )
        return selected

    @classmethod
    def decision_insights(
        cls,
        decision: Decision | Mapping[str, Any] | None,
        history: Iterable[Decision | Mapping[str, Any]] | None,
    ) -> list[Insight]:
        """Up to two insights placing one decision against similar past ones."""
        if decision is None:
            return []
        decision = as_decision(decision)
        history = as_decisions(history)
        insights: list[Insight] = []

        similar = [
            d for d in history
            if d.id != decision.id
            and (d.category == decision.category or d.weight_preset == decision.weight_preset)
        ]
        if similar and decision.final_score is not None:
            average = mean_score(similar)
            current = decision.final_score
            if abs(current - average) > cls.SIMILAR_DEVIATION:
                key = "more_certain" if current > average else "less_certain"
                insights.append(_insight(
                    "comparison", texts.DECISION_INSIGHTS[key], 8,
                    average=round_half_up(average), current=current,
                ))

        preset_name = texts.PRESET_ADJECTIVES.get(decision.weight_preset)
        if preset_name is not None:
            insights.append(_insight("preset", texts.DECISION_INSIGHTS["preset"], 6, preset=preset_name))

        return insights[: cls.MAX_DECISION_INSIGHTS]

    @classmethod
    def quick_mode_meta_insight(
        cls,
        answers: Optional[Mapping[str, Any]],
        history: Iterable[Decision | Mapping[str, Any]] | None,
    ) -> Optional[ExplanationInsight]:
        """Compare a quick-mode gut rating with the user's usual one.

        Needs at least three past quick-mode decisions; fires when the
        current rating is more than two points off their mean.
        """
        quick = [d for d in as_decisions(history) if d.mode == "quick"]
        if len(quick) < cls.MIN_QUICK_HISTORY:
            return None

        average = statistics.fmean(rating(d.answers.get("quickGut")) for d in quick)
        current = rating((answers or {}).get("quickGut"))

        if current > average + cls.GUT_DEVIATION:
            key = "higher"
        elif current < average - cls.GUT_DEVIATION:
            key = "lower"
        else:
            return None

        icon, text, detail = texts.QUICK_GUT_INSIGHTS[key]
        return ExplanationInsight(
            type="gut_comparison",
            icon=icon,
            text=text,
            detail=detail.format(average=round_half_up(average), current=_fmt_rating(current)),
        )

    # ── Pattern detectors ─────────────────────────────────────────────────

    @classmethod
    def _mode_preference(cls, decisions: list[Decision]) -> Optional[Insight]:
        total = len(decisions)
        if total < cls.MIN_DECISIONS_FOR_MODE:
            return None

        quick_count = sum(1 for d in decisions if d.mode == "quick")
        full_count = sum(1 for d in decisions if d.mode == "full")
        quick_share = quick_count / total * 100

        if quick_share >= 80:
            return _insight("mode_preference", texts.USER_INSIGHTS["mode_quick"], 7, count=quick_count, total=total)
        if quick_share <= 20:
            return _insight("mode_preference", texts.USER_INSIGHTS["mode_full"], 7, count=full_count, total=total)
        return None

    @classmethod
    def _confidence_trend(cls, decisions: list[Decision]) -> Optional[Insight]:
        if len(decisions) < cls.MIN_DECISIONS_FOR_PATTERNS:
            return None

        older, newer = split_halves(decisions)
        before, after = mean_score(older), mean_score(newer)
        difference = after - before

        if difference > cls.TREND_THRESHOLD:
            key = "confidence_up"
        elif difference < -cls.TREND_THRESHOLD:
            key = "confidence_down"
        else:
            return None
        return _insight(
            "confidence_trend", texts.USER_INSIGHTS[key], 9,
            before=round_half_up(before), after=round_half_up(after),
        )

    @classmethod
    def _category_focus(cls, decisions: list[Decision]) -> Optional[Insight]:
        total = len(decisions)
        if total < cls.MIN_DECISIONS_FOR_PATTERNS:
            return None

        category, top_count = Counter(d.category or "other" for d in decisions).most_common(1)[0]
        if top_count / total * 100 < 40:
            return None
        return _insight(
            "category_focus", texts.USER_INSIGHTS["category_focus"], 6,
            category=texts.CATEGORY_NAMES.get(category, category), count=top_count, total=total,
        )

    @classmethod
    def _decision_balance(cls, decisions: list[Decision]) -> Optional[Insight]:
        if len(decisions) < cls.MIN_DECISIONS_FOR_PATTERNS:
            return None

        yes_count = sum(1 for d in decisions if d.recommendation == "yes")
        no_count = sum(1 for d in decisions if d.recommendation == "no")
        decided = yes_count + no_count
        if decided == 0:
            return None

        yes_share = yes_count / decided * 100
        if yes_share >= 75:
            return _insight("decision_balance", texts.USER_INSIGHTS["mostly_yes"], 5, count=yes_count, total=decided)
        if yes_share <= 25:
            return _insight("decision_balance", texts.USER_INSIGHTS["mostly_no"], 5, count=no_count, total=decided)
        return None

    @classmethod
    def _decision_speed(cls, decisions: list[Decision]) -> Optional[Insight]:
        durations = [
            minutes_between(d.created_at, d.completed_at)
            for d in decisions
            if d.created_at is not None and d.completed_at is not None
        ]
        if len(durations) < cls.MIN_TIMED_DECISIONS:
            return None

        average = statistics.fmean(durations)
        if average < 2:
            key = "fast"
        elif average > 10:
            key = "slow"
        else:
            return None
        return _insight("speed", texts.USER_INSIGHTS[key], 4, minutes=round_half_up(average))
