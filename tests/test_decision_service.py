"""Unit tests for DecisionService — the decision lifecycle."""
from datetime import timedelta

import pytest

from vayze.schemas import Decision, Review
from vayze.services.decision_service import DecisionService
from vayze.services.review_service import ReviewService


@pytest.fixture
def decision_service():
    return DecisionService(review_service=ReviewService(delay_days=7, due_buffer_hours=24))


@pytest.fixture
def completed(decision_service, positive_full_answers, now):
    decision = decision_service.start_decision("Soll ich den Job wechseln?", now=now)
    for step, answer in positive_full_answers.items():
        decision = decision_service.update_answers(decision, step, answer)
    return decision_service.complete_decision(decision, now=now + timedelta(minutes=12))


class TestStart:
    """Tests for creating decisions."""

    def test_recommends_preset_from_text(self, decision_service, now):
        decision = decision_service.start_decision("Soll ich den Job wechseln?", category="career", now=now)
        assert decision.weight_preset == "career"
        assert decision.category == "career"
        assert decision.created_at == now
        assert decision.id.startswith("decision_")
        assert not decision.is_completed

    def test_explicit_preset_wins(self, decision_service):
        decision = decision_service.start_decision("Soll ich den Job wechseln?", weight_preset="financial")
        assert decision.weight_preset == "financial"

    def test_unknown_preset_stored_as_balanced(self, decision_service):
        assert decision_service.start_decision("Urlaub?", weight_preset="yolo").weight_preset == "balanced"

    def test_explicit_id_and_user(self, decision_service):
        decision = decision_service.start_decision("Urlaub?", decision_id="d-42", user_id="u-1", mode="quick")
        assert (decision.id, decision.user_id, decision.mode) == ("d-42", "u-1", "quick")


class TestAnswers:
    def test_update_is_copy(self, decision_service, now):
        decision = decision_service.start_decision("Urlaub?", now=now)
        updated = decision_service.update_answers(decision, "step1", {"gut": 7})
        assert updated.answers == {"step1": {"gut": 7}}
        assert decision.answers == {}

    def test_update_replaces_step(self, decision_service, now):
        decision = decision_service.start_decision("Urlaub?", now=now)
        decision = decision_service.update_answers(decision, "step1", {"gut": 7})
        decision = decision_service.update_answers(decision, "step1", {"gut": 2})
        assert decision.answers == {"step1": {"gut": 2}}

    def test_set_weight_preset(self, decision_service, now):
        decision = decision_service.start_decision("Urlaub?", now=now)
        assert decision_service.set_weight_preset(decision, "emotional").weight_preset == "emotional"
        assert decision_service.set_weight_preset(decision, None).weight_preset == "balanced"


class TestCompletion:
    """Tests for scoring and finalisation."""

    def test_calculate_recommendation(self, decision_service, positive_full_answers, now):
        decision = decision_service.start_decision("Urlaub?", weight_preset="balanced", now=now)
        decision = decision.model_copy(update={"answers": positive_full_answers})
        scored = decision_service.calculate_recommendation(decision)

        assert scored.final_score == 80
        assert scored.recommendation == "yes"
        assert scored.explanation.summary.startswith("Wir empfehlen **JA**")
        assert not scored.is_completed

    def test_complete_schedules_review(self, completed, now):
        assert completed.is_completed
        assert completed.completed_at == now + timedelta(minutes=12)
        assert completed.review_scheduled_for == now + timedelta(days=7)
        assert completed.final_score is not None
        assert completed.explanation is not None

    def test_complete_keeps_existing_result(self, decision_service, make_decision, now):
        decision = make_decision(final_score=35, recommendation="no")
        decision = decision_service.calculate_recommendation(decision)
        decision = decision.model_copy(update={"final_score": 35})
        assert decision_service.complete_decision(decision, now=now).final_score == 35

    def test_complete_without_created_at(self, decision_service, now):
        decision = decision_service.start_decision("Urlaub?", now=now).model_copy(update={"created_at": None})
        completed = decision_service.complete_decision(decision, now=now)
        assert completed.created_at == now
        assert completed.review_scheduled_for == now + timedelta(days=7)

    def test_complete_twice_raises(self, decision_service, completed):
        with pytest.raises(ValueError, match="complete"):
            decision_service.complete_decision(completed)

    @pytest.mark.parametrize(
        "call",
        [
            lambda s, d: s.update_answers(d, "step1", {"gut": 1}),
            lambda s, d: s.set_weight_preset(d, "career"),
            lambda s, d: s.calculate_recommendation(d),
        ],
    )
    def test_completed_is_frozen(self, decision_service, completed, call):
        with pytest.raises(ValueError):
            call(decision_service, completed)


class TestReviews:
    """Tests for attaching reviews."""

    def test_attach_review(self, decision_service, completed, now):
        reviewed = decision_service.attach_review(
            completed, Review(outcome="good", would_decide_again=True), now=now,
        )
        assert reviewed.review.decision_id == completed.id
        assert reviewed.review.review_date == now
        assert reviewed.review_reminded
        assert completed.review is None

    def test_attach_review_mapping(self, decision_service, completed, now):
        reviewed = decision_service.attach_review(
            completed, {"outcome": "bad", "wouldDecideAgain": False, "learnedLesson": "Zu schnell."}, now=now,
        )
        assert reviewed.review.learned_lesson == "Zu schnell."

    def test_second_review_rejected(self, decision_service, completed, make_review):
        reviewed = decision_service.attach_review(completed, make_review(decision_id=completed.id))
        with pytest.raises(ValueError, match="already has a review"):
            decision_service.attach_review(reviewed, make_review(decision_id=completed.id))

    def test_foreign_review_rejected(self, decision_service, completed, make_review):
        with pytest.raises(ValueError, match="belongs to decision"):
            decision_service.attach_review(completed, make_review(decision_id="someone_else"))

    def test_incomplete_review_rejected(self, decision_service, completed):
        with pytest.raises(ValueError, match="outcome"):
            decision_service.attach_review(completed, Review(outcome="good"))

    def test_mark_reminded(self, make_decision):
        assert DecisionService.mark_reminded(make_decision()).review_reminded

    def test_reviews_for(self, make_review):
        reviews = [make_review(decision_id="a"), make_review(decision_id="b"), make_review(decision_id="a")]
        assert len(DecisionService.reviews_for("a", reviews)) == 2


class TestCollections:
    """Tests for lookup, deletion and statistics."""

    def test_find_decision(self, make_decision):
        decisions = [make_decision(), make_decision()]
        assert DecisionService.find_decision("decision_2", decisions) is decisions[1]

    def test_find_missing_raises(self, make_decision):
        with pytest.raises(LookupError):
            DecisionService.find_decision("nope", [make_decision()])

    def test_delete_removes_reviews(self, decision_service, make_decision, make_review):
        decisions = [make_decision(), make_decision()]
        reviews = [make_review(decision_id="decision_1"), make_review(decision_id="decision_2")]
        remaining, kept = decision_service.delete_decision("decision_1", decisions, reviews)
        assert [d.id for d in remaining] == ["decision_2"]
        assert [r.decision_id for r in kept] == ["decision_2"]

    def test_delete_missing_raises(self, decision_service):
        with pytest.raises(LookupError):
            decision_service.delete_decision("nope", [], [])

    def test_statistics(self, make_decision, make_review):
        decisions = [
            make_decision(final_score=80, recommendation="yes", mode="quick"),
            make_decision(final_score=20, recommendation="no"),
            make_decision(final_score=55, recommendation="unclear"),
            make_decision(),
        ]
        stats = DecisionService.statistics(decisions, [make_review()])
        assert (stats.yes_count, stats.no_count, stats.unclear_count) == (1, 1, 1)
        assert (stats.quick_count, stats.full_count) == (1, 3)
        assert stats.avg_confidence == 51            # (80 + 20 + 55 + 50) / 4 = 51.25
        assert stats.review_rate == 25.0

    def test_statistics_empty(self):
        stats = DecisionService.statistics([])
        assert stats.total_decisions == 0
        assert stats.avg_confidence == 0
        assert stats.review_rate == 0.0


class TestNullFields:
    """Exported records carry null for fields the app never filled in."""

    def test_decision_defaults(self):
        decision = Decision.model_validate({
            "id": "d1", "decision": None, "category": None, "mode": None,
            "weightPreset": None, "answers": None, "reviewReminded": None,
        })
        assert (decision.decision, decision.category, decision.mode) == ("", "other", "full")
        assert decision.weight_preset == "balanced"
        assert decision.answers == {}
        assert decision.review_reminded is False

    def test_review_text_defaults(self):
        review = Review.model_validate({"decisionId": "d1", "notes": None, "learnedLesson": None})
        assert review.notes == review.learned_lesson == ""
