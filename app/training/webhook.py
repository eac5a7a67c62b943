"""Webhook-Endpunkt für Statusmeldungen des Trainingsdienstes.

Der Trainingsdienst meldet nach Abschluss:

    POST /api/models/{model_id}/status
    {"status": "completed"}   oder   {"status": "failed", "error_message": "..."}

Nur Wechsel aus "training" in einen Endzustand sind erlaubt.
"""

from __future__ import annotations

from typing import Any, Literal

from fastapi import HTTPException
from nicegui import app
from pydantic import BaseModel

from app.db.exceptions import InvalidStatusTransitionError, ModelNotFoundError
from app.logging_config import get_logger
from app.registry.models import ModelStatus

logger = get_logger("training.webhook")


class StatusUpdate(BaseModel):
    """Payload des Trainingsdienstes."""

    status: Literal["completed", "failed"]
    error_message: str | None = None


async def apply_status_update(model_id: str, update: StatusUpdate) -> dict[str, Any]:
    """Übernimmt eine Statusmeldung in die Datenbank.

    Raises:
        HTTPException: 503 ohne Datenbank, 404 bei unbekannter ID,
            409 bei unerlaubtem Statuswechsel.
    """
    from app.state import get_database

    db = get_database()
    if db is None:
        raise HTTPException(status_code=503, detail="Datenbank nicht verfügbar")

    try:
        record = await db.update_model_status(
            model_id, ModelStatus(update.status), error_message=update.error_message
        )
    except ModelNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidStatusTransitionError as exc:
        logger.warning("Webhook abgelehnt: %s", exc)
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    logger.info("Webhook: Modell %s → %s", model_id, record.status.value)
    return {"id": record.id, "status": record.status.value}


@app.post("/api/models/{model_id}/status")
async def handle_status_webhook(model_id: str, update: StatusUpdate) -> dict[str, Any]:
    """Empfängt Statusmeldungen des Trainingsdienstes."""
    return await apply_status_update(model_id, update)
