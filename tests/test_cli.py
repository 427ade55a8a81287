"""Tests for the ``vayze`` command-line entry point."""
import json

import pytest
import structlog

from vayze.cli import main


@pytest.fixture(autouse=True)
def _reset_structlog():
    """main() binds the log sink to the captured stderr of the running test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_json(tmp_path):
    def _write(name, payload):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def export(write_json, now):
    created = now.isoformat()
    return write_json("export.json", {
        "version": "2.0",
        "decisions": [
            {
                "id": "d1",
                "decision": "Neuer Job?",
                "category": "career",
                "finalScore": 80,
                "recommendation": "yes",
                "createdAt": created,
                "reviewScheduledFor": created,
                "review": {"decisionId": "d1", "outcome": "good", "wouldDecideAgain": True},
            },
            {
                "id": "d2",
                "decision": "Umziehen?",
                "mode": "quick",
                "finalScore": 30,
                "recommendation": "no",
                "createdAt": created,
                "reviewScheduledFor": created,
            },
        ],
    })


def _run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr().out


class TestCommands:
    def test_recommend_preset(self, capsys):
        code, out = _run(capsys, "recommend-preset", "Soll ich den Kredit aufnehmen?")
        assert code == 0
        payload = json.loads(out)
        assert payload["preset"] == "financial"
        assert payload["name"] == "Finanziell"

    def test_score(self, capsys, write_json, positive_full_answers):
        path = write_json("answers.json", positive_full_answers)
        code, out = _run(capsys, "score", path, "--preset", "balanced")
        payload = json.loads(out)
        assert code == 0
        assert payload["finalScore"] == 80
        assert payload["recommendation"] == "yes"
        assert payload["explanation"]["summary"].startswith("Wir empfehlen **JA**")

    def test_stats_uses_embedded_reviews(self, capsys, export):
        code, out = _run(capsys, "stats", export)
        payload = json.loads(out)
        assert code == 0
        assert payload["totalDecisions"] == 2
        assert payload["totalReviews"] == 1
        assert payload["reviewRate"] == 50.0

    def test_confidence(self, capsys, export, now):
        code, out = _run(capsys, "confidence", export, "--now", now.isoformat())
        payload = json.loads(out)
        assert code == 0
        assert 0 <= payload["score"] <= 100
        assert set(payload["factors"]) == {"clarity", "success", "consistency", "growth"}

    def test_profile(self, capsys, export, now):
        code, out = _run(capsys, "profile", export, "--now", now.isoformat())
        payload = json.loads(out)
        assert code == 0
        assert payload["metrics"]["totalDecisions"] == 2
        assert payload["archetype"]["id"]

    def test_empty_profile(self, capsys, write_json):
        code, out = _run(capsys, "profile", write_json("empty.json", {"decisions": []}))
        assert code == 0
        assert json.loads(out)["archetype"] is None

    def test_due_reviews(self, capsys, export, now):
        code, out = _run(capsys, "due-reviews", export, "--now", now.isoformat())
        assert code == 0
        assert [d["id"] for d in json.loads(out)] == ["d2"]

    def test_decision_insights(self, capsys, export):
        code, out = _run(capsys, "insights", export, "--decision", "d1")
        assert code == 0
        assert isinstance(json.loads(out), list)


class TestFailures:
    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_missing_file(self, capsys, tmp_path):
        assert main(["stats", str(tmp_path / "missing.json")]) == 1

    def test_export_must_be_object(self, capsys, write_json):
        assert main(["stats", write_json("list.json", [])]) == 1

    def test_invalid_json(self, capsys, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{nope", encoding="utf-8")
        assert main(["profile", str(path)]) == 1

    def test_unknown_decision(self, capsys, export):
        code, out = _run(capsys, "insights", export, "--decision", "missing")
        assert code == 1
        assert out == ""

    def test_invalid_record(self, capsys, write_json):
        path = write_json("bad.json", {"decisions": [{"id": "d1", "finalScore": 300}]})
        assert main(["confidence", path]) == 1

    def test_unknown_log_level(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--log-level", "bogus", "recommend-preset", "Kredit"])
        assert excinfo.value.code == 2

    def test_log_level_case_insensitive(self, capsys):
        code, out = _run(capsys, "--log-level", "debug", "recommend-preset", "Kredit")
        assert code == 0
        assert json.loads(out)["preset"] == "financial"
