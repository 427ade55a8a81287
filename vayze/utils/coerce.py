"""Validation of host-supplied records into engine models.

Hosts may hand the services either model instances or the plain JSON
mappings the mobile app exports (camelCase keys).  Anything else is a
programming error and surfaces as ``pydantic.ValidationError``.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from vayze.schemas.decision import Decision
from vayze.schemas.review import Review


def as_decision(value: Decision | Mapping[str, Any]) -> Decision:
    if isinstance(value, Decision):
        return value
    return Decision.model_validate(value)


def as_review(value: Review | Mapping[str, Any]) -> Review:
    if isinstance(value, Review):
        return value
    return Review.model_validate(value)


def as_decisions(values: Iterable[Decision | Mapping[str, Any]] | None) -> list[Decision]:
    return [as_decision(v) for v in values or ()]


def as_reviews(values: Iterable[Review | Mapping[str, Any]] | None) -> list[Review]:
    return [as_review(v) for v in values or ()]
