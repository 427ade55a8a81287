"""
Vayze — Command-line access to the decision engine

Runs the engine over a JSON export of the mobile app
(``{"decisions": [...], "reviews": [...], "version": "2.0"}``) and prints
the result as JSON on stdout.  Subcommands:

  score             — Score an answer set and explain the recommendation.
  recommend-preset  — Suggest a weight preset for a decision text.
  confidence        — Aggregate confidence score over an export.
  profile           — Behavioural profile and archetype.
  insights          — Pattern insights (or per-decision insights).
  due-reviews       — Decisions whose review is due.
  stats             — Decision and review counts.

Usage examples
--------------
  vayze recommend-preset "Soll ich den Kredit aufnehmen?"
  vayze score answers.json --mode quick --preset emotional
  vayze profile export.json --now 2026-03-01T12:00:00+00:00
  vayze insights export.json --decision decision_42
"""

from __future__ import annotations

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ValidationError

from vayze.config import LOG_LEVELS, get_settings
from vayze.log_config import configure_logging
from vayze.services.confidence_service import ConfidenceService
from vayze.services.decision_service import DecisionService
from vayze.services.explainer_service import ExplainerService
from vayze.services.insight_service import InsightService
from vayze.services.preset_service import PresetService
from vayze.services.profile_service import DecisionProfileService
from vayze.services.review_service import ReviewService
from vayze.services.score_service import ScoreService
from vayze.utils.coerce import as_decisions, as_reviews

logger = structlog.get_logger("vayze.cli")


# ──────────────────────────────────────────────────────────────────────────────
# Input / output helpers
# ──────────────────────────────────────────────────────────────────────────────

def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _load_export(path: str) -> tuple[list, list]:
    """Decisions and reviews of an export file.

    Reviews embedded in decisions are used when the export has no flat
    review list.
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object with a 'decisions' list")

    decisions = as_decisions(data.get("decisions") or [])
    reviews = as_reviews(data.get("reviews") or [])
    if not reviews:
        reviews = [d.review for d in decisions if d.review is not None]
    return decisions, reviews


def _parse_now(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _dump(payload: Any) -> None:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=True)
    elif isinstance(payload, list):
        payload = [
            item.model_dump(mode="json", by_alias=True) if isinstance(item, BaseModel) else item
            for item in payload
        ]
    print(json.dumps(payload, ensure_ascii=False, indent=2))


# ──────────────────────────────────────────────────────────────────────────────
# Subcommands
# ──────────────────────────────────────────────────────────────────────────────

def cmd_score(args: argparse.Namespace) -> None:
    answers = _read_json(args.answers)
    if not isinstance(answers, dict):
        raise ValueError(f"{args.answers}: expected a JSON object of answers")

    score = ScoreService.compute_score(answers, args.mode, args.preset)
    recommendation = ScoreService.recommendation_for(score)
    explanation = ExplainerService.explain(answers, args.mode, score, recommendation)
    _dump({
        "finalScore": score,
        "recommendation": recommendation,
        "preset": PresetService.get(args.preset).key,
        "explanation": explanation.model_dump(mode="json", by_alias=True),
    })


def cmd_recommend_preset(args: argparse.Namespace) -> None:
    key = PresetService.recommend(args.text)
    preset = PresetService.get(key)
    _dump({
        "preset": key,
        "name": preset.name,
        "icon": preset.icon,
        "reason": PresetService.explain(key),
    })


def cmd_confidence(args: argparse.Namespace) -> None:
    decisions, reviews = _load_export(args.export)
    _dump(ConfidenceService().compute_aggregate(decisions, reviews, now=_parse_now(args.now)))


def cmd_profile(args: argparse.Namespace) -> None:
    decisions, reviews = _load_export(args.export)
    _dump(DecisionProfileService.build(decisions, reviews, now=_parse_now(args.now)))


def cmd_insights(args: argparse.Namespace) -> None:
    decisions, _ = _load_export(args.export)
    if args.decision:
        decision = DecisionService.find_decision(args.decision, decisions)
        _dump(InsightService.decision_insights(decision, decisions))
    else:
        _dump(InsightService.user_insights(decisions))


def cmd_due_reviews(args: argparse.Namespace) -> None:
    decisions, _ = _load_export(args.export)
    due = ReviewService().find_due_reviews(decisions, now=_parse_now(args.now))
    _dump([
        {
            "id": d.id,
            "decision": d.decision,
            "reviewScheduledFor": d.review_scheduled_for.isoformat(),
        }
        for d in due
    ])


def cmd_stats(args: argparse.Namespace) -> None:
    decisions, reviews = _load_export(args.export)
    _dump(DecisionService.statistics(decisions, reviews))


# ──────────────────────────────────────────────────────────────────────────────
# CLI entry point
# ──────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vayze",
        description="Vayze decision engine — scores, profiles and insights over app exports.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Minimum log level for stderr output (default: VAYZE_LOG_LEVEL).",
    )
    parser.add_argument(
        "--console-logs",
        action="store_true",
        default=False,
        help="Human-readable log lines instead of JSON.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available subcommands")

    # ── score ─────────────────────────────────────────────────────────
    score_parser = subparsers.add_parser("score", help="Score and explain an answer set.")
    score_parser.add_argument("answers", help="JSON file with the answers mapping.")
    score_parser.add_argument("--mode", choices=("full", "quick"), default="full")
    score_parser.add_argument("--preset", default=None, help="Weight preset key (default: balanced).")
    score_parser.set_defaults(handler=cmd_score)

    # ── recommend-preset ──────────────────────────────────────────────
    preset_parser = subparsers.add_parser("recommend-preset", help="Suggest a preset for a decision text.")
    preset_parser.add_argument("text", help="Free-text decision description.")
    preset_parser.set_defaults(handler=cmd_recommend_preset)

    # ── export-based commands ─────────────────────────────────────────
    for name, handler, help_text, with_now in (
        ("confidence", cmd_confidence, "Aggregate confidence score.", True),
        ("profile", cmd_profile, "Behavioural profile and archetype.", True),
        ("insights", cmd_insights, "Pattern insights over the history.", False),
        ("due-reviews", cmd_due_reviews, "Decisions whose review is due.", True),
        ("stats", cmd_stats, "Decision and review counts.", False),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("export", help="JSON export file of the app.")
        if with_now:
            sub.add_argument("--now", default=None, help="Reference time (ISO 8601, default: current time).")
        if name == "insights":
            sub.add_argument("--decision", default=None, help="Decision id for per-decision insights.")
        sub.set_defaults(handler=handler)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(
        level=args.log_level or settings.LOG_LEVEL,
        json=settings.LOG_JSON and not args.console_logs,
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        args.handler(args)
    except (ValidationError, ValueError, LookupError, OSError) as exc:
        logger.error("command_failed", command=args.command, error=str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
