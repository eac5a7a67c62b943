"""Matcher: Wählt anhand einer Problembeschreibung das passende Katalog-Muster.

Ablauf:
1. Leere Beschreibung → Default-Schema, kein Katalog-Durchlauf
2. Beschreibung in Kleinbuchstaben umwandeln
3. Pro Muster zählen, wie viele Schlüsselwörter als Teilstring vorkommen
   (jedes Schlüsselwort zählt höchstens einmal)
4. Score = Priorität × Trefferzahl
5. Höchster Score gewinnt, bei Gleichstand der früher deklarierte Eintrag

Bewusst einfache Teilstring-Suche ohne Tokenisierung: "scamper" enthält
"scam" und zählt als Treffer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from app.logging_config import get_logger
from app.schemas.catalog import (
    SCHEMA_CATALOG,
    PatternEntry,
    SchemaSet,
    default_schema_set,
)

logger = get_logger("schemas")


@dataclass(frozen=True)
class MatchResult:
    """Gewinner eines Matcher-Durchlaufs mit Begründung."""

    pattern: PatternEntry
    matched_keywords: tuple[str, ...]
    score: int

    @property
    def match_count(self) -> int:
        return len(self.matched_keywords)


def match_pattern(
    problem_description: str,
    catalog: Sequence[PatternEntry] = SCHEMA_CATALOG,
) -> MatchResult | None:
    """Ermittelt das bestpassende Muster für eine Beschreibung.

    Args:
        problem_description: Freitext des Nutzers, darf leer sein.
        catalog: Zu durchsuchender Katalog (Standard: SCHEMA_CATALOG).

    Returns:
        MatchResult des Gewinners oder None, wenn nichts passt.
    """
    if not problem_description or not problem_description.strip():
        return None

    text = problem_description.lower()
    best: MatchResult | None = None

    for entry in catalog:
        matched = tuple(kw for kw in entry.keywords if kw in text)
        if not matched:
            continue
        score = entry.priority * len(matched)
        # Nur echte Verbesserung ersetzt den Gewinner
        if best is None or score > best.score:
            best = MatchResult(pattern=entry, matched_keywords=matched, score=score)

    return best


def generate_schemas(problem_description: str) -> SchemaSet:
    """Schlägt ein Input-/Output-Schema-Paar für die Beschreibung vor.

    Reine Funktion ohne Seiteneffekte außer Debug-Logging.
    Liefert immer ein gültiges SchemaSet, im Zweifel das Default-Schema.
    """
    result = match_pattern(problem_description)
    if result is None:
        logger.debug("Kein Muster erkannt – Default-Schema")
        return default_schema_set()

    logger.debug(
        "Muster '%s' gewählt: Score=%d, Treffer=%s",
        result.pattern.name,
        result.score,
        ", ".join(result.matched_keywords),
    )
    return result.pattern.generator()
