"""Shared pytest fixtures for Vayze engine tests."""
from datetime import datetime, timedelta, timezone

import pytest

from vayze.config import get_settings
from vayze.schemas import Decision, Review

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    """Keep VAYZE_* variables of the developer's shell out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("VAYZE_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_decision():
    """Factory for decisions; ``days_ago`` places ``created_at`` before NOW."""
    counter = {"n": 0}

    def _make(
        final_score=None,
        days_ago=0,
        mode="full",
        recommendation=None,
        category="other",
        weight_preset="balanced",
        minutes=None,
        answers=None,
        **extra,
    ):
        counter["n"] += 1
        created_at = NOW - timedelta(days=days_ago)
        fields = dict(
            id=f"decision_{counter['n']}",
            decision="Soll ich das wirklich machen?",
            category=category,
            mode=mode,
            weight_preset=weight_preset,
            answers=answers or {},
            final_score=final_score,
            recommendation=recommendation,
            created_at=created_at,
        )
        if minutes is not None:
            fields["completed_at"] = created_at + timedelta(minutes=minutes)
        fields.update(extra)
        return Decision(**fields)

    return _make


@pytest.fixture
def make_review():
    def _make(decision_id="decision_1", outcome="good", would_decide_again=True, **extra):
        return Review(
            decision_id=decision_id,
            outcome=outcome,
            would_decide_again=would_decide_again,
            **extra,
        )

    return _make


@pytest.fixture
def neutral_full_answers():
    """Every full-mode step at its midpoint; step6 left out."""
    return {
        "step1": {"gut": 5},
        "step2": {"opportunities": ["a", "b"], "risks": ["c", "d"]},
        "step3": {"positiveConsequences": ["x"], "negativeConsequences": ["y"]},
        "step4": {"alignment": 5},
        "step5": {"externalOpinion": 5},
    }


@pytest.fixture
def positive_full_answers():
    return {
        "step1": {"gut": 9},
        "step2": {"opportunities": ["a", "b", "c"], "risks": ["d"]},
        "step3": {"positiveConsequences": ["x", "y"], "negativeConsequences": []},
        "step4": {"alignment": 8},
        "step5": {"externalOpinion": 7},
        "step6": {"headDecision": "yes", "heartDecision": "yes"},
    }
