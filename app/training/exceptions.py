"""Spezifische Exceptions für den Trainingsdienst-Client.

Hierarchie:
    TrainingError (Basis)
    ├── TrainingConnectionError  – Netzwerkfehler, Timeout
    ├── TrainingAuthError        – 401/403, ungültiger Token
    ├── TrainingRejectedError    – 4xx, Auftrag abgelehnt
    ├── TrainingServerError      – 5xx, kann transient sein
    └── TrainingNotConfiguredError – keine TRAINING_API_URL gesetzt
"""

from __future__ import annotations


class TrainingError(Exception):
    """Basisklasse für alle Fehler beim Trainingsdienst."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TrainingConnectionError(TrainingError):
    """Trainingsdienst nicht erreichbar oder Timeout."""
    pass


class TrainingAuthError(TrainingError):
    """Token ungültig oder fehlt (401/403)."""
    pass


class TrainingRejectedError(TrainingError):
    """Trainingsauftrag vom Dienst abgelehnt (4xx außer Auth)."""
    pass


class TrainingServerError(TrainingError):
    """Serverseitiger Fehler (5xx)."""
    pass


class TrainingNotConfiguredError(TrainingError):
    """Kein Trainingsdienst konfiguriert."""

    def __init__(self) -> None:
        super().__init__("Kein Trainingsdienst konfiguriert (TRAINING_API_URL fehlt)")
