"""Health-Check-Funktionen für Subsystem-Prüfungen.

Seiteneffekt-frei: Wird sowohl vom Health-Check-Endpoint in main.py
als auch vom Dashboard importiert.
"""

from __future__ import annotations

from typing import Any

import httpx

from app.config import Settings


async def check_training_service_reachable(settings: Settings) -> dict[str, Any]:
    """Prüft ob der Trainingsdienst antwortet.

    Kein harter Fehler – Modelle können auch ohne Dienst angelegt werden,
    ihr Training schlägt dann fehl.
    """
    if not settings.training_enabled:
        return {"status": "not_configured"}

    url = settings.training_api_url
    try:
        async with httpx.AsyncClient(timeout=5.0, follow_redirects=True) as client:
            response = await client.get(f"{url}/health")
            if response.status_code == 200:
                return {"status": "ok", "url": url}
            return {"status": "error", "url": url, "http_status": response.status_code}
    except httpx.RequestError as e:
        return {"status": "unreachable", "url": url, "error": str(e)}


def check_sqlite_writable(settings: Settings) -> dict[str, Any]:
    """Prüft ob das Datenverzeichnis beschreibbar ist."""
    try:
        data_dir = settings.data_dir
        data_dir.mkdir(parents=True, exist_ok=True)
        test_file = data_dir / ".write_test"
        test_file.write_text("ok")
        test_file.unlink()
        return {"status": "ok", "path": str(data_dir)}
    except OSError as e:
        return {"status": "error", "path": str(settings.data_dir), "error": str(e)}


def overall_status(checks: dict[str, dict[str, Any]]) -> str:
    """Gesamtstatus aus Einzelprüfungen.

    healthy:   DB schreibbar + verbunden, Trainingsdienst ok
    degraded:  DB ok, Trainingsdienst fehlt oder nicht erreichbar
    unhealthy: DB-Probleme
    """
    critical_ok = (
        checks["database"]["status"] == "ok"
        and checks["db_connection"]["status"] == "ok"
    )
    if not critical_ok:
        return "unhealthy"
    if checks["training_service"]["status"] == "ok":
        return "healthy"
    return "degraded"
