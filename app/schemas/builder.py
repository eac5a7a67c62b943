"""Baukasten für JSON-Schema-Objekte.

Erzeugt aus einer Liste von Feldbeschreibungen ein Objekt mit fester Form:

    {"type": "object", "properties": {...}, "required": [...]}

Jeder Aufruf liefert ein neues Dict – Ergebnisse werden nie geteilt
oder nachträglich verändert.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

# Erlaubte Feldtypen (Teilmenge von JSON Schema)
FIELD_TYPES = frozenset({"string", "number", "integer", "boolean", "object", "array"})


@dataclass(frozen=True)
class FieldSpec:
    """Beschreibung eines einzelnen Feldes im Schema."""

    name: str
    type: str
    description: str
    items: dict[str, Any] | None = None   # nur bei type="array"
    minimum: float | None = None
    maximum: float | None = None

    def __post_init__(self) -> None:
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unbekannter Feldtyp '{self.type}' für Feld '{self.name}'")
        if self.items is not None and self.type != "array":
            raise ValueError(f"'items' ist nur bei Arrays erlaubt (Feld '{self.name}')")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(
                f"minimum > maximum für Feld '{self.name}' "
                f"({self.minimum} > {self.maximum})"
            )

    def to_schema(self) -> dict[str, Any]:
        """Feld als JSON-Schema-Fragment.

        Schlüsselreihenfolge: type, description, items, minimum, maximum.
        Grenzen werden auch bei 0 ausgegeben, nur None fällt weg.
        """
        fragment: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.items is not None:
            fragment["items"] = dict(self.items)
        if self.minimum is not None:
            fragment["minimum"] = self.minimum
        if self.maximum is not None:
            fragment["maximum"] = self.maximum
        return fragment


def build_schema(
    fields: Sequence[FieldSpec],
    required: Sequence[str] = (),
) -> dict[str, Any]:
    """Baut ein Objekt-Schema aus Feldbeschreibungen.

    Args:
        fields: Felder in der gewünschten Reihenfolge.
        required: Pflichtfelder – müssen in `fields` vorkommen.

    Returns:
        Neues Schema-Dict.

    Raises:
        ValueError: Bei doppelten Feldnamen oder unbekannten Pflichtfeldern.
    """
    properties: dict[str, Any] = {}
    for spec in fields:
        if spec.name in properties:
            raise ValueError(f"Feld '{spec.name}' ist doppelt definiert")
        properties[spec.name] = spec.to_schema()

    missing = [name for name in required if name not in properties]
    if missing:
        raise ValueError(f"Pflichtfelder ohne Definition: {', '.join(missing)}")

    return {
        "type": "object",
        "properties": properties,
        "required": list(required),
    }
