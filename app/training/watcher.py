"""Warten auf das Trainingsende eines Modells.

Der Trainingsdienst meldet Ergebnisse über den Webhook in die
Datenbank.  Die UI fragt den Status periodisch ab, bis ein Endzustand
(completed/failed) erreicht ist.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from app.db.exceptions import ModelNotFoundError
from app.logging_config import get_logger
from app.registry.models import ModelRecord

if TYPE_CHECKING:
    from app.db.database import Database

logger = get_logger("training")


async def wait_for_terminal_status(
    database: Database,
    model_id: str,
    poll_interval: float = 2.0,
    timeout: float | None = None,
) -> ModelRecord:
    """Fragt den Modellstatus ab, bis das Training beendet ist.

    Args:
        database: Initialisierte Database.
        model_id: ID des Modells.
        poll_interval: Sekunden zwischen zwei Abfragen.
        timeout: Maximale Wartezeit in Sekunden (None = unbegrenzt).

    Returns:
        Der Datensatz im Status completed oder failed.

    Raises:
        ModelNotFoundError: Wenn das Modell nicht (mehr) existiert.
        asyncio.TimeoutError: Wenn der Timeout überschritten wird.
    """

    async def _poll() -> ModelRecord:
        while True:
            record = await database.get_model(model_id)
            if record is None:
                raise ModelNotFoundError(model_id)
            if record.status.is_terminal:
                logger.debug("Modell %s beendet: %s", model_id, record.status.value)
                return record
            await asyncio.sleep(poll_interval)

    return await asyncio.wait_for(_poll(), timeout=timeout)
