"""
Vayze — numeric helpers shared by the aggregate services.

Clarity, consistency and the chronological first-half/second-half split are
used by the confidence score, the decision profile and the insight engine,
so they live here once.  A decision without a ``final_score`` counts as 50
(indecision) everywhere.
"""

from __future__ import annotations

import math
import statistics
from datetime import datetime, timezone
from typing import Sequence

from vayze.schemas.decision import Decision
from vayze.utils.timeutil import as_utc

NEUTRAL_SCORE: int = 50
MIN_DECISIONS_FOR_CONSISTENCY: int = 3

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, like the mobile app does."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def score_of(decision: Decision) -> int:
    """The decision's final score, or the neutral midpoint if not computed."""
    if decision.final_score is None:
        return NEUTRAL_SCORE
    return decision.final_score


def mean_score(decisions: Sequence[Decision]) -> float:
    if not decisions:
        return 0.0
    return statistics.fmean(score_of(d) for d in decisions)


def clarity(decisions: Sequence[Decision]) -> float:
    """Average distance from indecision, scaled to 0-100.

    A score of exactly 50 has clarity 0; a score of 0 or 100 has clarity 100.
    """
    if not decisions:
        return 0.0
    return statistics.fmean(abs(score_of(d) - NEUTRAL_SCORE) * 2 for d in decisions)


def consistency(decisions: Sequence[Decision]) -> float:
    """``max(0, 100 - 2 * stddev)`` over final scores; 50 below three decisions."""
    if len(decisions) < MIN_DECISIONS_FOR_CONSISTENCY:
        return 50.0
    stddev = statistics.pstdev([score_of(d) for d in decisions])
    return max(0.0, 100.0 - stddev * 2)


def chronological(decisions: Sequence[Decision]) -> list[Decision]:
    """Oldest first; decisions without ``created_at`` sort before all others."""
    return sorted(decisions, key=lambda d: as_utc(d.created_at) or _EPOCH)


def split_halves(decisions: Sequence[Decision]) -> tuple[list[Decision], list[Decision]]:
    """Split chronologically; the second half takes the extra element."""
    ordered = chronological(decisions)
    midpoint = len(ordered) // 2
    return ordered[:midpoint], ordered[midpoint:]
