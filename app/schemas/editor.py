"""Prüfung und Formatierung von Schema-Texten aus dem Editor.

Die Funktionen hier werden bei jedem Tastendruck im Schema-Editor
aufgerufen: zustandslos, idempotent und ohne Exceptions nach außen.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

# Feste Meldung für gültiges JSON, das kein Objekt ist
SCHEMA_NOT_OBJECT_MESSAGE = "Schema must be a JSON object, not an array or primitive value"

JSON_INDENT = 2


def _reject_constant(name: str) -> Any:
    """NaN, Infinity und -Infinity sind kein JSON."""
    raise ValueError(f"Ungültiger JSON-Wert: {name}")


@dataclass(frozen=True)
class ValidationResult:
    """Ergebnis von validate_schema().

    `error` ist genau dann gesetzt, wenn valid False ist,
    `parsed` genau dann, wenn valid True ist.
    """

    valid: bool
    error: str | None = None
    parsed: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Ergebnis als Dict, fehlende Felder werden weggelassen."""
        data: dict[str, Any] = {"valid": self.valid}
        if self.error is not None:
            data["error"] = self.error
        if self.parsed is not None:
            data["parsed"] = self.parsed
        return data


def validate_schema(schema_string: str) -> ValidationResult:
    """Prüft, ob ein Schema-Text ein JSON-Objekt ist.

    - Leer oder nur Leerzeichen → gültig, parsed = {} ("noch kein Schema")
    - Syntaxfehler → ungültig mit Meldung des JSON-Parsers
    - Array, Zahl, String, null → ungültig mit fester Meldung
    - NaN/Infinity oder zu tiefe Verschachtelung → ungültig
    """
    if not schema_string or not schema_string.strip():
        return ValidationResult(valid=True, parsed={})

    try:
        parsed = json.loads(schema_string, parse_constant=_reject_constant)
    except ValueError as exc:
        # JSONDecodeError ist eine Unterklasse von ValueError
        return ValidationResult(valid=False, error=str(exc))
    except RecursionError:
        return ValidationResult(valid=False, error="JSON ist zu tief verschachtelt")

    if not isinstance(parsed, dict):
        return ValidationResult(valid=False, error=SCHEMA_NOT_OBJECT_MESSAGE)

    return ValidationResult(valid=True, parsed=parsed)


def format_schema(schema_object: Mapping[str, Any]) -> str:
    """Serialisiert ein Schema mit 2 Leerzeichen Einrückung.

    Die Schlüsselreihenfolge bleibt wie im Objekt.
    """
    return json.dumps(schema_object, indent=JSON_INDENT, ensure_ascii=False)


def schema_to_string(schema_object: Mapping[str, Any] | None) -> str:
    """Wie format_schema, aber leerer String statt "{}" für fehlende Schemas."""
    if not schema_object:
        return ""
    return format_schema(schema_object)
