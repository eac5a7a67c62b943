"""Exceptions der Persistenzschicht.

Hierarchie:
    DatabaseError (Basis)
    ├── ModelNotFoundError            – ID existiert nicht
    └── InvalidStatusTransitionError  – z.B. completed → training
"""

from __future__ import annotations


class DatabaseError(Exception):
    """Basisklasse für alle Datenbankfehler."""
    pass


class ModelNotFoundError(DatabaseError):
    """Modell-Datensatz nicht gefunden."""

    def __init__(self, model_id: str) -> None:
        self.model_id = model_id
        super().__init__(f"Modell mit ID {model_id} nicht gefunden")


class InvalidStatusTransitionError(DatabaseError):
    """Statuswechsel ist nicht erlaubt."""

    def __init__(self, model_id: str, current: str, target: str) -> None:
        self.model_id = model_id
        self.current = current
        self.target = target
        super().__init__(
            f"Statuswechsel {current} → {target} für Modell {model_id} nicht erlaubt"
        )
