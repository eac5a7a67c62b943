"""Globaler Laufzeit-Zustand des Modell-Assistenten.

Dieses Modul enthält ausschließlich die Referenzen auf Laufzeit-Objekte
und Getter-Funktionen.  Es hat KEINE Seiteneffekte beim Import –
kein Logging, kein NiceGUI, keine Registrierungen.

`app.main` wird als `__main__` geladen.  Ein späterer
`from app.main import ...` würde das Modul erneut ausführen und dabei
`app.on_startup()` doppelt registrieren.  Deshalb liegen die Getter hier.
"""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Laufzeit-Objekte (werden von main.async_startup() gesetzt)
# ---------------------------------------------------------------------------

database: Any = None            # Database | None
training_client: Any = None     # TrainingClient | None
training_service: Any = None    # TrainingService | None


# ---------------------------------------------------------------------------
# Getter-Funktionen (für UI-Module, Webhook und Health-Check)
# ---------------------------------------------------------------------------

def get_database() -> Any:
    """Gibt die Database-Instanz zurück."""
    return database


def get_training_client() -> Any:
    """Gibt den TrainingClient zurück."""
    return training_client


def get_training_service() -> Any:
    """Gibt den TrainingService zurück."""
    return training_service
