"""Unit tests for DecisionProfileService — metrics, archetypes and advice."""
import pytest

from vayze.schemas import ProfileMetrics
from vayze.services.profile_service import DecisionProfileService


def _metrics(**overrides):
    values = dict(
        avg_confidence=60,
        mode_preference=50,
        decision_balance=50,
        avg_success_score=60,
        consistency=60,
        clarity_trend="stable",
        total_decisions=10,
        total_reviews=3,
    )
    values.update(overrides)
    return ProfileMetrics(**values)


class TestMetrics:
    """Tests for metric aggregation."""

    def test_counts_and_percentages(self, make_decision, make_review):
        decisions = [
            make_decision(final_score=80, mode="quick", recommendation="yes", category="career", minutes=10),
            make_decision(final_score=70, mode="full", recommendation="yes", category="career", minutes=20),
            make_decision(final_score=30, mode="full", recommendation="no", category="health"),
            make_decision(final_score=50, mode="quick", recommendation="unclear", category="career"),
        ]
        reviews = [make_review(decision_id="decision_1")]
        metrics = DecisionProfileService.calculate_metrics(decisions, reviews)

        assert metrics.avg_confidence == 58          # mean 57.5, half rounds up
        assert metrics.mode_preference == 50
        assert metrics.decision_balance == 50
        assert metrics.category_distribution == {"career": 3, "health": 1}
        assert metrics.avg_success_score == 100
        assert metrics.avg_decision_time_minutes == 15
        assert metrics.total_decisions == 4
        assert metrics.total_reviews == 1

    def test_preset_preference_tie_keeps_first_seen(self, make_decision):
        decisions = [make_decision(weight_preset="career"), make_decision(weight_preset="balanced")]
        assert DecisionProfileService.calculate_metrics(decisions, []).preset_preference == "career"

    def test_most_used_preset_wins(self, make_decision):
        decisions = [make_decision(weight_preset="career"), make_decision(), make_decision()]
        assert DecisionProfileService.calculate_metrics(decisions, []).preset_preference == "balanced"

    def test_no_completion_times(self, make_decision):
        metrics = DecisionProfileService.calculate_metrics([make_decision(final_score=60)], [])
        assert metrics.avg_decision_time_minutes == 0

    def test_improving_clarity_trend(self, make_decision):
        """Older half clarity 50, newer half 70."""
        scores = [20, 30, 25, 80, 85, 90]
        decisions = [make_decision(final_score=s, days_ago=10 - i) for i, s in enumerate(scores)]
        assert DecisionProfileService.calculate_metrics(decisions, []).clarity_trend == "improving"

    def test_declining_clarity_trend(self, make_decision):
        scores = [80, 85, 90, 55, 45, 50]
        decisions = [make_decision(final_score=s, days_ago=10 - i) for i, s in enumerate(scores)]
        assert DecisionProfileService.calculate_metrics(decisions, []).clarity_trend == "declining"

    def test_trend_uses_creation_order(self, make_decision):
        """Input order does not matter, only created_at."""
        scores = [20, 30, 25, 80, 85, 90]
        decisions = [make_decision(final_score=s, days_ago=10 - i) for i, s in enumerate(scores)]
        decisions.reverse()
        assert DecisionProfileService.calculate_metrics(decisions, []).clarity_trend == "improving"

    def test_trend_neutral_below_five(self, make_decision):
        decisions = [make_decision(final_score=s, days_ago=i) for i, s in enumerate((0, 100, 50, 50))]
        assert DecisionProfileService.calculate_metrics(decisions, []).clarity_trend == "neutral"


class TestArchetype:
    """Tests for archetype rule ordering."""

    def test_confident_decider_boundary(self):
        """All three thresholds are inclusive."""
        metrics = _metrics(avg_confidence=70, avg_success_score=70, consistency=70)
        assert DecisionProfileService.determine_archetype(metrics).id == "confident_decider"

    def test_confident_beats_intuitive(self):
        metrics = _metrics(avg_confidence=80, avg_success_score=80, consistency=80, mode_preference=90, decision_balance=90)
        assert DecisionProfileService.determine_archetype(metrics).id == "confident_decider"

    def test_cautious_analyst(self):
        metrics = _metrics(avg_confidence=55, mode_preference=10, decision_balance=30)
        assert DecisionProfileService.determine_archetype(metrics).id == "cautious_analyst"

    def test_intuitive_doer(self):
        metrics = _metrics(avg_confidence=65, mode_preference=80, decision_balance=70, avg_success_score=0)
        assert DecisionProfileService.determine_archetype(metrics).id == "intuitive_doer"

    def test_growing_learner(self):
        metrics = _metrics(avg_confidence=40, clarity_trend="improving", total_decisions=5)
        assert DecisionProfileService.determine_archetype(metrics).id == "growing_learner"

    def test_growing_learner_needs_five_decisions(self):
        metrics = _metrics(avg_confidence=40, consistency=30, clarity_trend="improving", total_decisions=4)
        assert DecisionProfileService.determine_archetype(metrics).id == "searcher"

    def test_balanced_thinker(self):
        assert DecisionProfileService.determine_archetype(_metrics()).id == "balanced_thinker"

    def test_searcher(self):
        metrics = _metrics(avg_confidence=40, consistency=30)
        assert DecisionProfileService.determine_archetype(metrics).id == "searcher"

    def test_fallback_is_balanced(self):
        """No rule matches: unclear but consistent."""
        metrics = _metrics(avg_confidence=45, consistency=80)
        assert DecisionProfileService.determine_archetype(metrics).id == "balanced_thinker"

    def test_archetype_display_fields(self):
        archetype = DecisionProfileService.determine_archetype(_metrics(avg_confidence=40, consistency=30))
        assert archetype.name == "Der Suchende"
        assert archetype.color == "#ec4899"
        assert len(archetype.traits) == 3


class TestStrengthsAndGrowth:
    """Tests for strengths and growth areas."""

    def test_strengths_capped_at_four(self):
        metrics = _metrics(
            avg_confidence=80, avg_success_score=80, consistency=80,
            clarity_trend="improving", mode_preference=80, total_reviews=10,
        )
        strengths = DecisionProfileService.identify_strengths(metrics)
        assert [s.title for s in strengths] == ["Hohe Klarheit", "Hohe Erfolgsquote", "Konsistenz", "Wachstum"]
        assert strengths[0].description == "Du erreichst durchschnittlich 80% Klarheit bei deinen Entscheidungen."

    def test_reflection_strength(self):
        strengths = DecisionProfileService.identify_strengths(_metrics(total_reviews=5, total_decisions=10))
        assert [s.title for s in strengths] == ["Reflexion"]

    def test_no_strengths_without_decisions(self):
        assert DecisionProfileService.identify_strengths(ProfileMetrics()) == []

    def test_growth_areas_capped_at_three(self):
        metrics = _metrics(avg_confidence=30, avg_success_score=30, consistency=20, clarity_trend="declining")
        areas = DecisionProfileService.identify_growth_areas(metrics)
        assert [a.title for a in areas] == ["Klarheit steigern", "Entscheidungsqualität", "Konsistenz aufbauen"]
        assert all(a.actionable for a in areas)

    def test_quality_needs_three_reviews(self):
        areas = DecisionProfileService.identify_growth_areas(_metrics(avg_success_score=30, total_reviews=2))
        assert areas == []

    def test_missing_reflection(self):
        areas = DecisionProfileService.identify_growth_areas(_metrics(total_reviews=0, total_decisions=5))
        assert [a.title for a in areas] == ["Reflexion fehlt"]

    @pytest.mark.parametrize("balance, tendency", [(90, "JA"), (80, "JA"), (10, "NEIN"), (20, "NEIN")])
    def test_one_sided_tendency(self, balance, tendency):
        areas = DecisionProfileService.identify_growth_areas(_metrics(decision_balance=balance))
        assert areas[-1].description == f"Du sagst fast immer {tendency}. Hinterfrage deine Muster."


class TestRecommendations:
    def test_searcher_without_reviews(self):
        metrics = _metrics(avg_confidence=40, consistency=30, total_reviews=0)
        archetype = DecisionProfileService.determine_archetype(metrics)
        recommendations = DecisionProfileService.generate_recommendations(archetype, metrics)
        assert [r.priority for r in recommendations] == ["high", "high", "medium"]
        assert recommendations[0].text == "Definiere deine Kernwerte in den Einstellungen."

    def test_balanced_thinker_has_no_archetype_advice(self):
        metrics = _metrics(avg_confidence=65)
        archetype = DecisionProfileService.determine_archetype(metrics)
        assert DecisionProfileService.generate_recommendations(archetype, metrics) == []

    def test_confident_decider_is_low_priority(self):
        metrics = _metrics(avg_confidence=80, avg_success_score=80, consistency=80)
        archetype = DecisionProfileService.determine_archetype(metrics)
        recommendations = DecisionProfileService.generate_recommendations(archetype, metrics)
        assert [(r.priority, r.text) for r in recommendations] == [
            ("low", "Teile deine Entscheidungen mit anderen, um ihnen zu helfen."),
        ]


class TestBuild:
    """Tests for the full pipeline."""

    def test_empty_history(self, now):
        profile = DecisionProfileService.build([], [], now=now)
        assert profile.archetype is None
        assert profile.strengths == profile.growth_areas == profile.recommendations == []
        assert profile.metrics.total_decisions == 0
        assert profile.generated_at == now

    def test_confident_history(self, make_decision, make_review, now):
        decisions = [make_decision(final_score=80, recommendation="yes", days_ago=i) for i in range(3)]
        reviews = [make_review(decision_id=d.id) for d in decisions]
        profile = DecisionProfileService.build(decisions, reviews, now=now)

        assert profile.archetype.id == "confident_decider"
        assert profile.metrics.consistency == 100
        assert [s.title for s in profile.strengths][:2] == ["Hohe Klarheit", "Hohe Erfolgsquote"]
        assert profile.growth_areas[-1].title == "Einseitigkeit"

    def test_accepts_exported_mappings(self, now):
        payload = [{"id": "d1", "finalScore": 20, "mode": "full", "recommendation": "no"}]
        profile = DecisionProfileService.build(payload, None, now=now)
        assert profile.metrics.total_decisions == 1
        assert profile.archetype.id == "cautious_analyst"

    def test_null_fields_in_export(self, now):
        payload = [
            {"id": "d1", "finalScore": 80, "category": None, "weightPreset": None, "mode": None},
            {"id": "d2", "finalScore": 70, "category": "career", "weightPreset": None, "decision": None},
        ]
        profile = DecisionProfileService.build(payload, [{"decisionId": "d1", "notes": None}], now=now)
        assert profile.metrics.category_distribution == {"other": 1, "career": 1}
        assert profile.metrics.preset_preference == "balanced"
        assert profile.metrics.total_reviews == 1
