"""Training – Anbindung an den externen Trainingsdienst.

Öffentliche API:
- TrainingClient: Async HTTP Client für Trainingsaufträge
- TrainingService: Modell speichern + Training anstoßen
- wait_for_terminal_status: Warten auf completed/failed

Der Webhook-Endpunkt (app.training.webhook) wird von main.py
importiert, damit die Route beim Server registriert ist.
"""

from app.training.client import TrainingClient
from app.training.exceptions import (
    TrainingAuthError,
    TrainingConnectionError,
    TrainingError,
    TrainingNotConfiguredError,
    TrainingRejectedError,
    TrainingServerError,
)
from app.training.service import TrainingService
from app.training.watcher import wait_for_terminal_status

__all__ = [
    "TrainingClient",
    "TrainingService",
    "wait_for_terminal_status",
    "TrainingAuthError",
    "TrainingConnectionError",
    "TrainingError",
    "TrainingNotConfiguredError",
    "TrainingRejectedError",
    "TrainingServerError",
]
