"""Einstiegspunkt des Modell-Assistenten.

Startet den NiceGUI-Server mit integriertem Health-Check-Endpoint
und Status-Webhook.  NiceGUI bringt FastAPI/Uvicorn mit – kein
separater Server nötig.

Lifecycle:
1. startup()        – Logging, Config-Validierung (synchron)
2. async_startup()  – Datenbank, Trainings-Client und -Service
3. ... Server läuft ...
4. shutdown()       – laufende Aufträge abwarten, Clients schließen
"""

import sys
from datetime import datetime, timezone
from typing import Any

from nicegui import app, ui

from app.config import get_settings
from app.logging_config import get_logger, setup_logging
import app.state as state

logger = get_logger("app")

VERSION = "0.1.0"


# Health-Check-Funktionen (ausgelagert, um zirkuläre Imports zu vermeiden)
from app.health import (
    check_sqlite_writable,
    check_training_service_reachable,
    overall_status,
)


# --- FastAPI-Endpoint auf dem NiceGUI-Server ---

@app.get("/health")
async def health_check() -> dict[str, Any]:
    """Health-Check-Endpoint für Docker und Monitoring.

    Gibt HTTP 200 zurück solange der Service grundsätzlich läuft.
    Der Trainingsdienst kann 'degraded' sein ohne den Container zu killen.
    """
    settings = get_settings()

    checks = {
        "database": check_sqlite_writable(settings),
        "db_connection": {"status": "ok" if state.database is not None else "error"},
        "training_service": await check_training_service_reachable(settings),
    }

    return {
        "status": overall_status(checks),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION,
        "checks": checks,
    }


# --- Startup / Shutdown ---

def startup() -> None:
    """Wird beim Serverstart ausgeführt – initialisiert Logging und prüft Config."""
    try:
        settings = get_settings()
    except Exception as e:
        # Ohne gültige Config kann der Container nicht starten
        print(f"FATAL: Konfigurationsfehler – {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(
        log_level=settings.log_level.value,
        log_dir=settings.log_dir,
    )

    logger.info("=" * 60)
    logger.info("Modell-Assistent v%s startet", VERSION)
    logger.info("=" * 60)
    logger.info("Trainingsdienst: %s", settings.training_api_url or "nicht konfiguriert")
    logger.info("Log-Level: %s", settings.log_level.value)
    logger.info("Datenverzeichnis: %s", settings.data_dir)


async def async_startup() -> None:
    """Asynchrone Initialisierung: DB, Trainings-Client, Service.

    Fehler hier sind nicht fatal – der Container läuft weiter im
    degraded-Modus (Health-Check zeigt den Zustand an).
    """
    settings = get_settings()

    # --- SQLite-Datenbank ---
    try:
        from app.db.database import Database

        state.database = Database(settings.db_path)
        await state.database.initialize()
    except Exception as exc:
        logger.error("Datenbank konnte nicht initialisiert werden: %s", exc)
        state.database = None
        return

    # --- TrainingClient (optional) ---
    if settings.training_enabled:
        try:
            from app.training.client import TrainingClient

            state.training_client = TrainingClient(
                base_url=settings.training_api_url,
                token=settings.training_api_token,
                timeout=settings.training_timeout_seconds,
            )
            await state.training_client.__aenter__()
            logger.info("TrainingClient initialisiert: %s", settings.training_api_url)
        except Exception as exc:
            logger.error("TrainingClient konnte nicht initialisiert werden: %s", exc)
            state.training_client = None
    else:
        logger.warning(
            "TRAINING_API_URL nicht konfiguriert – "
            "neue Modelle werden als 'failed' markiert"
        )

    from app.training.service import TrainingService

    state.training_service = TrainingService(state.database, state.training_client)


async def shutdown() -> None:
    """Graceful Shutdown.  Reihenfolge:
    1. Laufende Trainingsaufträge abwarten
    2. TrainingClient schließen
    3. Datenbank schließen
    """
    logger.info("Shutdown eingeleitet...")

    if state.training_service is not None:
        try:
            await state.training_service.shutdown()
        except Exception as exc:
            logger.error("Fehler beim Beenden des TrainingService: %s", exc)
        state.training_service = None

    if state.training_client is not None:
        try:
            await state.training_client.__aexit__(None, None, None)
            logger.info("TrainingClient geschlossen")
        except Exception as exc:
            logger.error("Fehler beim Schließen des TrainingClients: %s", exc)
        state.training_client = None

    if state.database is not None:
        try:
            await state.database.close()
        except Exception as exc:
            logger.error("Fehler beim Schließen der Datenbank: %s", exc)
        state.database = None

    logger.info("Modell-Assistent beendet")


app.on_startup(startup)
app.on_startup(async_startup)
app.on_shutdown(shutdown)


# --- Webhook-Route und UI-Seiten registrieren ---
# Muss vor ui.run() passieren, damit die Routen beim Server-Start bekannt sind.
import app.training.webhook as _status_webhook  # noqa: E402,F401
from app.ui import register_pages

register_pages()


# --- Haupteinstiegspunkt ---

def main() -> None:
    """Startet den NiceGUI-Server."""
    settings = get_settings()
    ui.run(
        host=settings.host,
        port=settings.port,
        title="Model Wizard",
        # Kein automatisches Browser-Öffnen im Container
        show=False,
        reload=False,
        favicon=None,
    )


if __name__ == "__main__":
    main()
