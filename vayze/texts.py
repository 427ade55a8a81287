"""
Vayze — German user-facing text catalogue.

Every summary, insight, archetype and tip the engine emits is a template in
one of the tables below.  The services decide *which* entry fires; this
module only owns the wording.  Templates use ``str.format`` placeholders.
Changing locale means replacing this module's tables, nothing else.
"""

from __future__ import annotations

# ──────────────────────────────────────────────────────────────────────────────
# Presets
# ──────────────────────────────────────────────────────────────────────────────

PRESET_REASONS: dict[str, str] = {
    "career": "Diese Entscheidung scheint beruflich zu sein. Wir fokussieren auf langfristige Karrierechancen.",
    "relationship": "Diese Entscheidung scheint zwischenmenschlich zu sein. Wir berücksichtigen deine Gefühle stärker.",
    "financial": "Diese Entscheidung scheint finanziell zu sein. Wir fokussieren auf Risiken und Expertenmeinungen.",
    "emotional": "Diese Entscheidung scheint persönlich zu sein. Wir hören auf dein Bauchgefühl.",
    "rational": "Diese Entscheidung erfordert logisches Denken. Wir fokussieren auf Fakten und Konsequenzen.",
    "balanced": "Wir berücksichtigen alle Faktoren gleichmäßig.",
}

PRESET_ADJECTIVES: dict[str, str] = {
    "rational": "rational",
    "emotional": "emotional",
    "career": "karriereorientiert",
    "relationship": "beziehungsorientiert",
    "financial": "finanziell",
}

# ──────────────────────────────────────────────────────────────────────────────
# Explanation factors: (label, description, icon) keyed by factor id
# ──────────────────────────────────────────────────────────────────────────────

FACTORS: dict[str, tuple[str, str, str]] = {
    "gut_positive": ("Bauchgefühl", "Dein Bauchgefühl war positiv", "💚"),
    "gut_negative": ("Bauchgefühl", "Dein Bauchgefühl war negativ", "💔"),
    "gut_neutral": ("Bauchgefühl", "Dein Bauchgefühl war neutral", "😐"),
    "opportunities_outweigh": ("Chancen überwiegen", "{pro} Chancen vs {con} Risiken", "📈"),
    "risks_outweigh": ("Risiken überwiegen", "{con} Risiken vs {pro} Chancen", "⚠️"),
    "risks_balanced": ("Ausgeglichene Chancen/Risiken", "{pro} Chancen und Risiken", "⚖️"),
    "consequences_positive": ("Positive Konsequenzen", "{pro} positive vs {con} negative", "✨"),
    "consequences_negative": ("Negative Konsequenzen", "{con} negative vs {pro} positive", "⛔"),
    "values_aligned": ("Passt zu deinen Zielen", "Hohe Übereinstimmung mit deinen Werten", "🎯"),
    "values_conflict": ("Widerspricht deinen Zielen", "Geringe Übereinstimmung mit deinen Werten", "🚫"),
    "external_positive": ("Positive Außenmeinungen", "Andere raten dir dazu", "👥"),
    "external_negative": ("Negative Außenmeinungen", "Andere raten dir ab", "👎"),
    "head_heart_yes": ("Kopf & Herz stimmen zu", "Vollständige innere Übereinstimmung", "💯"),
    "head_heart_no": ("Kopf & Herz lehnen ab", "Vollständige innere Ablehnung", "🚷"),
    "head_heart_conflict_head": ("Innerer Konflikt", "Kopf ja, Herz nein", "🤔"),
    "head_heart_conflict_heart": ("Innerer Konflikt", "Herz ja, Kopf nein", "🤔"),
    "pros_outweigh": ("Mehr Pro-Argumente", "{pro} Pro vs {con} Contra", "✅"),
    "cons_outweigh": ("Mehr Contra-Argumente", "{con} Contra vs {pro} Pro", "❌"),
    "pros_balanced": ("Ausgeglichene Argumente", "{pro} Pro und Contra", "⚖️"),
}

# Substring identifying a head/heart disagreement among neutral factor labels.
CONFLICT_MARKER = "Konflikt"

# ──────────────────────────────────────────────────────────────────────────────
# Explanation summary
# ──────────────────────────────────────────────────────────────────────────────

SUMMARY_YES_HEADER = "Wir empfehlen **JA**, weil:\n\n"
SUMMARY_NO_HEADER = "Wir empfehlen **NEIN**, weil:\n\n"
SUMMARY_FACTOR_LINE = "{icon} **{label}**: {description}\n"
SUMMARY_YES_CAVEAT = "\n⚠️ **Beachte aber**: {description}"
SUMMARY_NO_CAVEAT = "\n💡 **Aber**: {description}"
SUMMARY_UNCLEAR_HEADER = "Die Entscheidung ist **UNKLAR**:\n\n"
SUMMARY_UNCLEAR_COUNTS = "Es gibt {pro} Argumente dafür und {con} dagegen.\n\n"
SUMMARY_UNCLEAR_NEUTRAL = "{icon} {description}"
SUMMARY_UNCLEAR_ADVICE = "\n\n💭 Nimm dir mehr Zeit oder sammle mehr Informationen."

SHORT_SUMMARY_MISSING = "Keine Erklärung verfügbar"
SHORT_SUMMARY_FALLBACK = "Entscheidung analysiert"

# ──────────────────────────────────────────────────────────────────────────────
# Explanation insights: (icon, text, detail)
# ──────────────────────────────────────────────────────────────────────────────

EXPLANATION_INSIGHTS: dict[str, tuple[str, str, str]] = {
    "clarity_yes": (
        "🎯", "Die Entscheidung ist sehr klar.",
        "Alle Faktoren zeigen in die gleiche Richtung.",
    ),
    "clarity_no": (
        "🎯", "Die Entscheidung ist sehr klar.",
        "Die Faktoren sprechen deutlich dagegen.",
    ),
    "uncertainty": (
        "🤔", "Die Entscheidung ist unsicher.",
        "Die Pro- und Contra-Argumente halten sich die Waage. "
        "Sammle mehr Informationen oder höre auf dein Bauchgefühl.",
    ),
    "conflict": (
        "⚡", "Kopf und Herz sind sich uneinig.",
        "Das ist normal bei schwierigen Entscheidungen. "
        "Frage dich: Was wiegt langfristig schwerer?",
    ),
}

DOMINANT_POSITIVE = "{label} ist der Hauptgrund."
DOMINANT_NEGATIVE = "{label} ist das Hauptproblem."

# ──────────────────────────────────────────────────────────────────────────────
# Confidence score
# ──────────────────────────────────────────────────────────────────────────────

CONFIDENCE_EMPTY_INSIGHT = "Treffe deine erste Entscheidung, um deinen Score zu sehen!"
CONFIDENCE_EMPTY_MESSAGE = "Noch keine Daten vorhanden"

# (lower bound, text), checked top-down
CONFIDENCE_BANDS: list[tuple[int, str]] = [
    (80, "🎯 Exzellent! Du triffst sehr klare und erfolgreiche Entscheidungen."),
    (60, "👍 Gut! Du bist auf dem richtigen Weg."),
    (40, "💪 Solide Basis. Mit mehr Übung wirst du noch besser."),
    (0, "🌱 Du bist am Anfang. Jede Entscheidung macht dich stärker."),
]

CONFIDENCE_TRENDS: dict[str, str] = {
    "improving": "📈 Dein Score steigt - du wirst besser!",
    "declining": "📉 Dein Score sinkt. Nimm dir mehr Zeit oder nutze Full Mode.",
}

CONFIDENCE_WEAKEST: dict[str, str] = {
    "clarity": "🎯 Fokus: Triff klarere Entscheidungen. Nutze Full Mode für mehr Sicherheit.",
    "success": "🔄 Fokus: Reflektiere deine Entscheidungen mit Reviews.",
    "consistency": "🧭 Fokus: Definiere deine Kernwerte und bleibe ihnen treu.",
    "growth": "📚 Fokus: Lerne aus vergangenen Entscheidungen.",
}

CONFIDENCE_STRONGEST: dict[str, str] = {
    "clarity": "✨ Stärke: Deine Entscheidungen sind sehr klar!",
    "success": "🏆 Stärke: Deine Entscheidungen verlaufen erfolgreich!",
    "consistency": "🔒 Stärke: Du bist sehr konsistent in deinen Entscheidungen!",
    "growth": "🚀 Stärke: Du wächst kontinuierlich!",
}

SCORE_MESSAGES: list[tuple[int, str]] = [
    (90, "Meisterhaft"),
    (80, "Exzellent"),
    (70, "Sehr gut"),
    (60, "Gut"),
    (50, "Solide"),
    (40, "Ausbaufähig"),
    (30, "Entwicklungspotenzial"),
    (0, "Am Anfang"),
]

FACTOR_EXPLANATIONS: dict[str, dict[str, str]] = {
    "clarity": {
        "name": "Klarheit",
        "icon": "🎯",
        "description": "Wie eindeutig sind deine Entscheidungen?",
        "tip": "Hohe Werte bei finalScore (weit weg von 50) = hohe Klarheit",
    },
    "success": {
        "name": "Erfolg",
        "icon": "🏆",
        "description": "Wie erfolgreich verlaufen deine Entscheidungen?",
        "tip": 'Basierend auf Reviews: Outcome und "würde es wieder tun"',
    },
    "consistency": {
        "name": "Konsistenz",
        "icon": "🔒",
        "description": "Bleibst du deinen Werten treu?",
        "tip": "Niedrige Standardabweichung = hohe Konsistenz",
    },
    "growth": {
        "name": "Wachstum",
        "icon": "📈",
        "description": "Werden deine Entscheidungen besser?",
        "tip": "Vergleich zwischen alten und neuen Entscheidungen",
    },
}

# ──────────────────────────────────────────────────────────────────────────────
# Decision profile
# ──────────────────────────────────────────────────────────────────────────────

ARCHETYPES: dict[str, dict] = {
    "confident_decider": {
        "name": "Der Sichere Entscheider",
        "icon": "🎯",
        "description": "Du triffst klare Entscheidungen mit hoher Erfolgsquote.",
        "traits": ["Selbstsicher", "Konsistent", "Erfolgreich"],
        "color": "#10b981",
    },
    "cautious_analyst": {
        "name": "Der Vorsichtige Analytiker",
        "icon": "🔍",
        "description": "Du analysierst gründlich und entscheidest bedacht.",
        "traits": ["Analytisch", "Vorsichtig", "Gründlich"],
        "color": "#3b82f6",
    },
    "intuitive_doer": {
        "name": "Der Intuitive Macher",
        "icon": "⚡",
        "description": "Du vertraust deinem Bauchgefühl und handelst schnell.",
        "traits": ["Intuitiv", "Schnell", "Risikofreudig"],
        "color": "#f59e0b",
    },
    "growing_learner": {
        "name": "Der Wachsende Lerner",
        "icon": "📈",
        "description": "Du wirst immer besser im Entscheiden.",
        "traits": ["Lernbereit", "Wachsend", "Reflektiert"],
        "color": "#8b5cf6",
    },
    "balanced_thinker": {
        "name": "Der Ausgewogene Denker",
        "icon": "⚖️",
        "description": "Du wägst Chancen und Risiken fair ab.",
        "traits": ["Ausgewogen", "Fair", "Bedacht"],
        "color": "#06b6d4",
    },
    "searcher": {
        "name": "Der Suchende",
        "icon": "🧭",
        "description": "Du bist auf der Suche nach deinem Weg.",
        "traits": ["Suchend", "Offen", "Experimentierfreudig"],
        "color": "#ec4899",
    },
}

# (icon, title, description template)
STRENGTHS: dict[str, tuple[str, str, str]] = {
    "high_clarity": (
        "💪", "Hohe Klarheit",
        "Du erreichst durchschnittlich {avg_confidence}% Klarheit bei deinen Entscheidungen.",
    ),
    "high_success": (
        "🎯", "Hohe Erfolgsquote",
        "{avg_success_score}% deiner Entscheidungen verlaufen positiv.",
    ),
    "consistency": (
        "🔒", "Konsistenz",
        "Du bleibst deinen Werten treu und entscheidest konsistent.",
    ),
    "growth": (
        "📈", "Wachstum",
        "Deine Entscheidungen werden zunehmend klarer.",
    ),
    "speed": (
        "⚡", "Schnelligkeit",
        "Du kannst schnell und intuitiv entscheiden.",
    ),
    "reflection": (
        "🔄", "Reflexion",
        "Du nimmst dir Zeit, deine Entscheidungen zu reflektieren.",
    ),
}

GROWTH_AREAS: dict[str, tuple[str, str, str]] = {
    "clarity": (
        "🎯", "Klarheit steigern",
        "Nutze öfter den Full Mode, um mehr Sicherheit zu gewinnen.",
    ),
    "quality": (
        "🔍", "Entscheidungsqualität",
        "Nimm dir mehr Zeit für wichtige Entscheidungen.",
    ),
    "consistency": (
        "🧭", "Konsistenz aufbauen",
        "Überlege dir deine Kernwerte und bleibe ihnen treu.",
    ),
    "declining_clarity": (
        "⚠️", "Klarheit nimmt ab",
        "Du wirkst unsicherer. Ist gerade viel los? Nimm dir eine Pause.",
    ),
    "missing_reflection": (
        "🔄", "Reflexion fehlt",
        "Nutze die Review-Funktion, um aus Entscheidungen zu lernen.",
    ),
    "one_sided": (
        "⚖️", "Einseitigkeit",
        "Du sagst fast immer {tendency}. Hinterfrage deine Muster.",
    ),
}

RECOMMENDATIONS: dict[str, str] = {
    "confident_decider": "Teile deine Entscheidungen mit anderen, um ihnen zu helfen.",
    "cautious_analyst": "Probiere auch mal Quick Mode - vertraue deinem Bauchgefühl.",
    "intuitive_doer": "Bei wichtigen Entscheidungen: Nutze Full Mode für mehr Tiefe.",
    "searcher": "Definiere deine Kernwerte in den Einstellungen.",
    "no_reviews": "Nutze Reviews, um aus vergangenen Entscheidungen zu lernen.",
    "low_confidence": "Mehr Zeit nehmen kann helfen - nutze Full Mode häufiger.",
}

# ──────────────────────────────────────────────────────────────────────────────
# Insight engine: (icon, text, detail template)
# ──────────────────────────────────────────────────────────────────────────────

USER_INSIGHTS: dict[str, tuple[str, str, str]] = {
    "mode_quick": (
        "⚡", "Du liebst schnelle Entscheidungen",
        "{count} von {total} Entscheidungen im Quick Mode. Du vertraust deinem Bauchgefühl.",
    ),
    "mode_full": (
        "🔍", "Du analysierst gerne im Detail",
        "{count} von {total} Entscheidungen im Full Mode. Du nimmst dir Zeit zum Nachdenken.",
    ),
    "confidence_up": (
        "📈", "Deine Klarheit steigt",
        "Deine Entscheidungen werden sicherer. Von {before}% auf {after}%.",
    ),
    "confidence_down": (
        "📉", "Du wirkst unsicherer",
        "Deine Entscheidungen wurden weniger klar. Von {before}% auf {after}%. Nimm dir mehr Zeit.",
    ),
    "category_focus": (
        "🎯", "{category} ist dein Hauptthema",
        "{count} von {total} Entscheidungen waren in diesem Bereich.",
    ),
    "mostly_yes": (
        "✅", "Du sagst meist JA",
        "{count} von {total} Entscheidungen waren positiv. Du bist risikofreudig.",
    ),
    "mostly_no": (
        "🛡️", "Du sagst meist NEIN",
        "{count} von {total} Entscheidungen waren negativ. Du bist vorsichtig.",
    ),
    "fast": (
        "⚡", "Du entscheidest blitzschnell",
        "Durchschnittlich nur {minutes} Minuten pro Entscheidung.",
    ),
    "slow": (
        "🐢", "Du nimmst dir viel Zeit",
        "Durchschnittlich {minutes} Minuten pro Entscheidung. Das ist gut!",
    ),
}

CATEGORY_NAMES: dict[str, str] = {
    "career": "Karriere",
    "relationship": "Beziehungen",
    "finance": "Finanzen",
    "lifestyle": "Lifestyle",
    "health": "Gesundheit",
    "other": "verschiedene Bereiche",
}

DECISION_INSIGHTS: dict[str, tuple[str, str, str]] = {
    "more_certain": (
        "📊", "Du bist diesmal sicherer als sonst",
        "Bei ähnlichen Entscheidungen lagst du meist bei {average}%, jetzt bei {current}%.",
    ),
    "less_certain": (
        "📊", "Du bist diesmal unsicherer als sonst",
        "Bei ähnlichen Entscheidungen lagst du meist bei {average}%, jetzt bei {current}%.",
    ),
    "preset": (
        "🎯", "Du hast {preset} entschieden",
        "Diese Gewichtung hat deine Entscheidung beeinflusst.",
    ),
}

QUICK_GUT_INSIGHTS: dict[str, tuple[str, str, str]] = {
    "higher": (
        "💚", "Dein Bauchgefühl ist diesmal besonders positiv!",
        "Normalerweise liegst du bei {average}/10, jetzt bei {current}/10.",
    ),
    "lower": (
        "🤔", "Dein Bauchgefühl ist unsicher.",
        "Normalerweise liegst du bei {average}/10, jetzt nur bei {current}/10. Vielleicht Full Mode nutzen?",
    ),
}

# ──────────────────────────────────────────────────────────────────────────────
# Reviews
# ──────────────────────────────────────────────────────────────────────────────

REVIEW_OUTCOMES: dict[str, str] = {
    "good": "positiv verlaufen",
    "neutral": "neutral verlaufen",
    "bad": "negativ verlaufen",
}
REVIEW_OUTCOME_OPEN = "noch offen"
REVIEW_AGAIN_YES = "würdest du wieder so entscheiden"
REVIEW_AGAIN_NO = "würdest du anders entscheiden"
REVIEW_SUMMARY = "Die Entscheidung ist {outcome} und du {again}."
