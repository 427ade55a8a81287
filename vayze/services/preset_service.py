"""
Vayze — Weight Presets & Preset Recommendation

The six weight presets bias which questionnaire dimensions matter most for
a decision.  Each preset is a vector of relative multipliers over the six
dimensions (intuition, risk, consequences, values, external, head/heart);
the vectors are not normalised and need not sum to any constant.

Preset recommendation is a keyword classifier over the free-text decision
description.  Categories are checked in a fixed priority order and the
first one with any matching keyword wins:

  career → relationship → financial → emotional → rational → balanced

Matching is a case-insensitive substring test, so "Bewerbung" hits the
``bewerb`` stem and "Finanzierung" hits ``finanz``.
"""

from __future__ import annotations

from typing import Optional

import structlog

from vayze import texts
from vayze.schemas.preset import WeightPreset, WeightVector

logger = structlog.get_logger("vayze.preset_service")

# ──────────────────────────────────────────────────────────────────────────────
# Preset registry
# ──────────────────────────────────────────────────────────────────────────────

DEFAULT_PRESET = "balanced"


def _preset(key: str, name: str, description: str, icon: str, *weights: float) -> WeightPreset:
    intuition, risk, consequences, values, external, head_heart = weights
    return WeightPreset(
        key=key,
        name=name,
        description=description,
        icon=icon,
        weights=WeightVector(
            intuition=intuition,
            risk=risk,
            consequences=consequences,
            values=values,
            external=external,
            head_heart=head_heart,
        ),
    )


#                                                                   int  risk  cons  val   ext   h/h
WEIGHT_PRESETS: dict[str, WeightPreset] = {
    "balanced": _preset(
        "balanced", "Ausgewogen", "Alle Faktoren gleichmäßig berücksichtigt", "⚖️",
        1.0, 1.0, 1.0, 1.0, 1.0, 1.0,
    ),
    "rational": _preset(
        "rational", "Rational", "Fokus auf Logik, Fakten und langfristige Konsequenzen", "🧠",
        0.5, 1.5, 1.8, 1.2, 1.3, 0.7,
    ),
    "emotional": _preset(
        "emotional", "Emotional", "Fokus auf Bauchgefühl und innere Werte", "❤️",
        1.8, 0.7, 0.8, 1.5, 0.5, 1.6,
    ),
    "career": _preset(
        "career", "Karriere", "Optimiert für berufliche Entscheidungen", "💼",
        0.8, 1.4, 1.6, 1.3, 1.2, 0.9,
    ),
    "relationship": _preset(
        "relationship", "Beziehung", "Optimiert für zwischenmenschliche Entscheidungen", "💕",
        1.6, 0.8, 1.2, 1.5, 0.6, 1.7,
    ),
    "financial": _preset(
        "financial", "Finanziell", "Optimiert für Geld- und Investitionsentscheidungen", "💰",
        0.6, 1.8, 1.7, 1.1, 1.4, 0.5,
    ),
}

# Checked in this order; first category with a matching stem wins.
_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("career", ("job", "karriere", "arbeit", "stelle", "bewerb", "chef")),
    ("relationship", ("beziehung", "freund", "partner", "liebe", "heirat", "trennung")),
    ("financial", ("kauf", "geld", "invest", "kredit", "finanz", "€", "euro", "dollar")),
    ("emotional", ("gefühl", "herz", "lieb", "glück", "traum")),
    ("rational", ("logisch", "vernünft", "rational", "fakt")),
]


class PresetService:
    """Read-only access to the preset registry plus the keyword recommender."""

    # ── Registry ──────────────────────────────────────────────────────────

    @staticmethod
    def get(key: Optional[str]) -> WeightPreset:
        """Return the preset for *key*, falling back to ``balanced``.

        Unknown or missing keys never raise.
        """
        preset = WEIGHT_PRESETS.get(key) if key else None
        if preset is None:
            if key:
                logger.warning("preset_fallback", requested=key, fallback=DEFAULT_PRESET)
            return WEIGHT_PRESETS[DEFAULT_PRESET]
        return preset

    @staticmethod
    def list_presets() -> list[WeightPreset]:
        return list(WEIGHT_PRESETS.values())

    @staticmethod
    def is_known(key: Optional[str]) -> bool:
        return key in WEIGHT_PRESETS

    # ── Recommendation ────────────────────────────────────────────────────

    @staticmethod
    def recommend(decision_text: Optional[str]) -> str:
        """Suggest a preset key for a free-text decision description."""
        if not decision_text:
            return DEFAULT_PRESET

        lowered = decision_text.lower()
        for key, stems in _KEYWORDS:
            for stem in stems:
                if stem in lowered:
                    logger.debug("preset_recommended", preset=key, keyword=stem)
                    return key

        return DEFAULT_PRESET

    @staticmethod
    def explain(preset_key: Optional[str]) -> str:
        """Human-readable justification for a recommended preset."""
        return texts.PRESET_REASONS.get(preset_key or "", texts.PRESET_REASONS[DEFAULT_PRESET])
